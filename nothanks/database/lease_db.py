"""
Action leases for No-Thanks-over-SSH.

A lease marks a table as being mutated until `expires_at`. A lease that
outlived its holder (crash, killed process) is simply taken over once expired.
"""

import time
import logging


class LeaseDatabaseMixin:
    """Mixin class providing table lease operations."""

    def acquire_lease(self, table_id: str, holder: str, seconds: float) -> bool:
        """Try to take the lease for a table. Returns False if someone else holds it."""
        now = time.time()
        with self.get_cursor() as cursor:
            # Take the write lock up front so two processes can't both see the row as free
            cursor.execute("BEGIN IMMEDIATE")
            cursor.execute(
                "SELECT holder, expires_at FROM table_leases WHERE table_id = ?",
                (table_id,)
            )
            row = cursor.fetchone()
            if row and row['holder'] != holder:
                if row['expires_at'] > now:
                    return False
                logging.warning(
                    f"Lease on table {table_id} held by {row['holder']} expired "
                    f"{now - row['expires_at']:.1f}s ago, taking it over"
                )
            cursor.execute("""
                INSERT INTO table_leases (table_id, holder, expires_at)
                VALUES (?, ?, ?)
                ON CONFLICT(table_id) DO UPDATE SET
                    holder = excluded.holder,
                    expires_at = excluded.expires_at
            """, (table_id, holder, now + seconds))
            return True

    def release_lease(self, table_id: str, holder: str) -> None:
        with self.get_cursor() as cursor:
            cursor.execute(
                "DELETE FROM table_leases WHERE table_id = ? AND holder = ?",
                (table_id, holder)
            )

    def clear_leases(self) -> int:
        """Drop every lease. Called at server start-up."""
        with self.get_cursor() as cursor:
            cursor.execute("DELETE FROM table_leases")
            removed = cursor.rowcount
        if removed:
            logging.info(f"Cleared {removed} stale table lease(s)")
        return removed
