"""Feature modules."""

from .diff import LocalizationDiff, DiffResult
from .loader_options import loader_pattern, match_loaders, apply_loader_options

__all__ = [
    'LocalizationDiff',
    'DiffResult',
    'loader_pattern',
    'match_loaders',
    'apply_loader_options',
]
