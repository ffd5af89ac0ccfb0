"""
i18n Collector
==============

Collects translatable text fragments recorded by module loaders during a
build and reports what changed against the last published translation set.

Usage:
    from i18n_collector import I18nPlugin, MemoryAssetSink

    plugin = I18nPlugin(i18n_path='./i18n')
    session = plugin.collect()
    session.record('src/app.js', [('5d41402a', 'Hello')])
    result = plugin.finalize(session.complete(), ['src/app.js'], [], MemoryAssetSink())
    print(result.diff.added)

CLI:
    i18n-collector init
    i18n-collector report --manifest build-manifest.json
    i18n-collector diff --current fragments.json --baseline zh.xlsx.js
"""

from .__version__ import __version__, __author__, __description__

# Core exports
from .core.registry import FragmentEntry, FragmentRegistry
from .core.aggregator import KeyCollision, aggregate
from .core.baseline import BaselineError, AmbiguousBaselineError, BuildInput, load_baseline
from .core.collector import (
    I18nPlugin,
    CollectionSession,
    CollectedFragments,
    FinalizeResult,
    EmittedAsset,
    MemoryAssetSink,
    DirectoryAssetSink,
)

# Features
from .features.diff import DiffResult, LocalizationDiff, diff

# Loaders and reports
from .loaders.base import BaseFragmentLoader, derive_key
from .reports.html_reporter import HTMLReporter, render

__all__ = [
    '__version__',
    '__author__',
    '__description__',
    'FragmentEntry',
    'FragmentRegistry',
    'KeyCollision',
    'aggregate',
    'BaselineError',
    'AmbiguousBaselineError',
    'BuildInput',
    'load_baseline',
    'I18nPlugin',
    'CollectionSession',
    'CollectedFragments',
    'FinalizeResult',
    'EmittedAsset',
    'MemoryAssetSink',
    'DirectoryAssetSink',
    'DiffResult',
    'LocalizationDiff',
    'diff',
    'BaseFragmentLoader',
    'derive_key',
    'HTMLReporter',
    'render',
]
