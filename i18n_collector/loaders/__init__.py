"""Loader contract for fragment-producing module loaders."""

from .base import BaseFragmentLoader, derive_key

__all__ = [
    'BaseFragmentLoader',
    'derive_key',
]
