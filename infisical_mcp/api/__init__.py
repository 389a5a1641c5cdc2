"""API utilities and dependencies.

This package contains shared API utilities:
- deps: wiring and FastAPI dependency injection functions
"""

from .deps import build_dispatcher, get_client_ip, get_dispatcher, get_settings_dep

__all__ = [
    "build_dispatcher",
    "get_dispatcher",
    "get_settings_dep",
    "get_client_ip",
]
