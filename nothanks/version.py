"""
Version information for No-Thanks-over-SSH
This file is automatically updated on releases.
"""

VERSION = "0.4.0"
BUILD_DATE = "dev"
COMMIT_HASH = "dev"


def get_version_info():
    """Get formatted version information"""
    return {
        'version': VERSION,
        'build_date': BUILD_DATE,
        'commit_hash': COMMIT_HASH
    }
