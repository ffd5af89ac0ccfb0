"""Utility modules."""

from .colors import Colors
from .config import (
    Config,
    ConfigValidationError,
    ConfigValidationWarning,
    create_default_config,
)
from .logging import get_logger, configure_logging, reset_logger
from .validators import is_valid_language_code, is_valid_asset_name

__all__ = [
    'Colors',
    'Config',
    'ConfigValidationError',
    'ConfigValidationWarning',
    'create_default_config',
    'get_logger',
    'configure_logging',
    'reset_logger',
    'is_valid_language_code',
    'is_valid_asset_name',
]
