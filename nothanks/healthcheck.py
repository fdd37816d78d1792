"""Healthcheck service for No-Thanks-over-SSH

Runs a small HTTP server on HEALTHCHECK_PORT that returns JSON status for the
database and the table.
"""

import logging
import time
from typing import Any, Dict, Optional

from aiohttp import web

from .table import Table


class HealthcheckService:
    def __init__(self, table: Table, db=None, host: str = '0.0.0.0', port: int = 22223):
        self.table = table
        self.db = db
        self.host = host
        self.port = port
        self._runner: Optional[web.AppRunner] = None

    def collect_status(self) -> Dict[str, Any]:
        status: Dict[str, Any] = {
            'status': 'ok',
            'checked_at': int(time.time()),
            'table': None,
            'database': None,
        }

        try:
            state = self.table.current_state()
            table_info: Dict[str, Any] = {
                'table_id': self.table.table_id,
                'phase': state.phase.value if state else 'setup',
                'busy': self.table.gate.busy,
            }
            if state is not None:
                table_info['deck_size'] = state.deck_size
                table_info['players'] = [p.name for p in state.players]
                issues = state.check_invariants()
                table_info['issues'] = issues
                if issues:
                    status['status'] = 'warn'
            status['table'] = table_info
        except Exception as e:
            logging.exception('Healthcheck could not read the table')
            status['status'] = 'fail'
            status['table'] = {'error': str(e)}

        if self.db is not None:
            try:
                status['database'] = self.db.get_database_stats()
            except Exception as e:
                logging.exception('Healthcheck could not read the database')
                status['status'] = 'fail'
                status['database'] = {'error': str(e)}

        return status

    async def status_handler(self, request):
        status = self.collect_status()
        return web.json_response(status, status=200 if status['status'] != 'fail' else 503)

    def make_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get('/health', self.status_handler)
        return app

    async def start(self):
        self._runner = web.AppRunner(self.make_app())
        await self._runner.setup()
        site = web.TCPSite(self._runner, host=self.host, port=self.port)
        await site.start()
        logging.info(f'Healthcheck HTTP server listening on {self.host}:{self.port}')

    async def stop(self):
        if self._runner is not None:
            await self._runner.cleanup()
            self._runner = None
