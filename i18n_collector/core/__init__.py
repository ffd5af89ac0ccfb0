"""Core modules: registry, aggregation, baseline loading and the run lifecycle."""

from .registry import FragmentEntry, FragmentRegistry
from .aggregator import KeyCollision, aggregate, merge_fragments, collect_collisions
from .baseline import (
    BaselineError,
    AmbiguousBaselineError,
    BaselineLoader,
    BuildInput,
    load_baseline,
    parse_baseline_module,
)
from .collector import (
    I18nPlugin,
    CollectionSession,
    CollectedFragments,
    FinalizeResult,
    EmittedAsset,
    MemoryAssetSink,
    DirectoryAssetSink,
    SessionClosedError,
    ReportGenerationError,
)

__all__ = [
    'FragmentEntry',
    'FragmentRegistry',
    'KeyCollision',
    'aggregate',
    'merge_fragments',
    'collect_collisions',
    'BaselineError',
    'AmbiguousBaselineError',
    'BaselineLoader',
    'BuildInput',
    'load_baseline',
    'parse_baseline_module',
    'I18nPlugin',
    'CollectionSession',
    'CollectedFragments',
    'FinalizeResult',
    'EmittedAsset',
    'MemoryAssetSink',
    'DirectoryAssetSink',
    'SessionClosedError',
    'ReportGenerationError',
]
