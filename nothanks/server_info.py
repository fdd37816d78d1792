"""
Server information module for No-Thanks-over-SSH
Handles loading of environment configuration and version information.
"""

import os
from typing import Any, Dict, Optional

from dotenv import dotenv_values

from .version import get_version_info

DEFAULTS = {
    'SERVER_ENV': 'Development',
    'SERVER_HOST': 'localhost',
    'SERVER_PORT': '22222',
    'SERVER_NAME': 'No-Thanks-over-SSH Server',
    'DATABASE_PATH': 'nothanks_data.db',
    'ACTION_TIMEOUT': '5',
    'LEASE_SECONDS': '5',
    'HEALTHCHECK_PORT': '22223',
    'HOST_KEY_PATH': 'nothanks_host_key',
}


def load_env_file(filepath: str = ".env") -> Dict[str, str]:
    """Load variables from a .env file (missing file means no overrides)."""
    return {k: v for k, v in dotenv_values(filepath).items() if v is not None}


def get_setting(key: str, env_vars: Optional[Dict[str, str]] = None) -> str:
    """Real environment first, then the .env file, then the built-in default."""
    if env_vars is None:
        env_vars = load_env_file()
    return os.getenv(key) or env_vars.get(key) or DEFAULTS[key]


def get_server_info() -> Dict[str, Any]:
    """Get complete server information including version and environment details"""
    env_vars = load_env_file()
    settings = {key: get_setting(key, env_vars) for key in DEFAULTS}

    server_host = settings['SERVER_HOST']
    server_port = settings['SERVER_PORT']

    return {
        'server_env': settings['SERVER_ENV'],
        'server_host': server_host,
        'server_port': server_port,
        'server_name': settings['SERVER_NAME'],
        'database_path': settings['DATABASE_PATH'],
        'action_timeout': float(settings['ACTION_TIMEOUT']),
        'lease_seconds': float(settings['LEASE_SECONDS']),
        'healthcheck_port': int(settings['HEALTHCHECK_PORT']),
        'host_key_path': settings['HOST_KEY_PATH'],
        'ssh_connection_string': f"{server_host} -p {server_port}" if server_port != "22" else server_host,
        **get_version_info()
    }


def format_motd(server_info: Dict[str, Any]) -> str:
    """Format the Message of the Day with server information"""
    from .ui.colors import Colors

    motd_lines = [
        f"{Colors.BOLD}{Colors.RED}🚫 Welcome to No Thanks! over SSH 🚫{Colors.RESET}",
        f"🖥️ Server: {Colors.CYAN}{server_info['server_name']}{Colors.RESET}",
        f"🌐 Environment: {Colors.YELLOW}{server_info['server_env']}{Colors.RESET}",
        f"📍 Connect: {Colors.BOLD}ssh <username>@{server_info['ssh_connection_string']}{Colors.RESET}",
    ]

    if server_info['version'] != 'dev':
        motd_lines.append(f"📦 Version: {Colors.DIM}{server_info['version']} ({server_info['build_date']}){Colors.RESET}")

    return "\r\n".join(motd_lines)
