from .config import settings, get_settings
from .logging_config import setup_logging
from .security import (
    create_access_token,
    verify_access_token,
    verify_password,
    get_password_hash
)

__all__ = [
    "settings",
    "get_settings",
    "setup_logging",
    "create_access_token",
    "verify_access_token",
    "verify_password",
    "get_password_hash"
]
