"""Two-phase collect / finalize lifecycle for one compilation run."""

from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union
from dataclasses import dataclass, field

from ..features.diff import DiffResult, diff
from ..features.loader_options import LOADER_KINDS, apply_loader_options, loader_pattern, match_loaders
from ..reports.html_reporter import HTMLReporter
from ..utils.config import Config, ConfigValidationError
from ..utils.logging import get_logger
from .aggregator import KeyCollision, aggregate
from .baseline import BaselineError, BaselineLoader, BuildInput
from .registry import EntryLike, FragmentEntry, FragmentRegistry

logger = get_logger('core.collector')

PACKAGE_NAME = 'i18n-collector'


class SessionClosedError(Exception):
    """A module tried to record fragments after the session was completed."""


class ReportGenerationError(Exception):
    """The report for this run could not be produced; the build itself may go on."""


@dataclass(frozen=True)
class EmittedAsset:
    """A named output artifact handed to the host's asset sink."""
    name: str
    content: str

    @property
    def size(self) -> int:
        """Size of the UTF-8 encoded content in bytes."""
        return len(self.content.encode('utf-8'))


AssetSink = Callable[[EmittedAsset], None]


class MemoryAssetSink:
    """Keeps emitted assets by name."""

    def __init__(self):
        self.assets: Dict[str, EmittedAsset] = {}

    def __call__(self, asset: EmittedAsset) -> None:
        self.assets[asset.name] = asset


class DirectoryAssetSink:
    """Writes emitted assets into a directory."""

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)
        self.written: List[Path] = []

    def __call__(self, asset: EmittedAsset) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / asset.name
        with open(path, 'w', encoding='utf-8') as f:
            f.write(asset.content)
        self.written.append(path)
        logger.debug(f"Wrote {asset.name} ({asset.size} bytes) to {path}")


# Passed by CollectionSession.complete(); other callers cannot construct a snapshot
_SEAL = object()


class CollectedFragments:
    """
    Sealed snapshot of a completed collection session.

    Only CollectionSession.complete() creates these; finalize() refuses
    anything else, so every module write is known to be done before the
    registry is read.
    """

    def __init__(self, modules: Mapping[str, Tuple[FragmentEntry, ...]], _seal: object = None):
        if _seal is not _SEAL:
            raise TypeError("CollectedFragments is only created by CollectionSession.complete()")
        self._modules = MappingProxyType(dict(modules))

    @property
    def modules(self) -> Mapping[str, Tuple[FragmentEntry, ...]]:
        return self._modules

    def to_registry(self) -> FragmentRegistry:
        """Fresh registry holding the snapshot."""
        registry = FragmentRegistry()
        for module_id, entries in self._modules.items():
            registry.record(module_id, entries)
        return registry

    def __len__(self) -> int:
        return len(self._modules)


class CollectionSession:
    """
    Collect phase: loaders record fragments here, one module at a time.

    Each run gets its own session (I18nPlugin.collect()), so recordings
    never leak from one run into the next.
    """

    def __init__(self, registry: Optional[FragmentRegistry] = None):
        self.registry = registry if registry is not None else FragmentRegistry()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def record(self, module_id: str, entries: Optional[Iterable[EntryLike]] = None) -> None:
        """
        Record a module's fragments (replacing an earlier recording).

        Raises:
            SessionClosedError: the session was already completed
        """
        if self._closed:
            raise SessionClosedError(
                f"Cannot record '{module_id}': collection session already completed"
            )
        self.registry.record(module_id, entries)

    def complete(self) -> CollectedFragments:
        """Close the session and return its sealed snapshot."""
        self._closed = True
        snapshot = {
            module_id: tuple(self.registry.entries_for(module_id))
            for module_id in self.registry.all_module_ids()
        }
        logger.debug(f"Collection completed: {len(snapshot)} modules recorded")
        return CollectedFragments(snapshot, _seal=_SEAL)


@dataclass
class FinalizeResult:
    """Outcome of the finalize phase."""
    diff: DiffResult
    asset: EmittedAsset
    current: List[str] = field(default_factory=list)
    collisions: List[KeyCollision] = field(default_factory=list)
    baseline: Optional[str] = None  # identifier of the baseline input


def _to_build_input(item: Union[BuildInput, Tuple[str, str]]) -> BuildInput:
    if isinstance(item, BuildInput):
        return item
    identifier, source = item
    return BuildInput(identifier=identifier, source=source)


class I18nPlugin:
    """
    Fragment collection for a build.

    Usage:
        plugin = I18nPlugin(i18n_path='./i18n')
        session = plugin.collect()
        loader.process('src/app.js', source, session)   # per module
        collected = session.complete()
        plugin.finalize(collected, live_module_ids, build_inputs, sink)
    """

    def __init__(self, config: Optional[Config] = None, **options: Any):
        """
        Args:
            config: Full configuration; when omitted it is built from options
            **options: Flat options (i18n_path, locale, parse_object_property,
                parse_binary_expression, generate_report, report_name,
                warn_on_collision)

        Raises:
            ConfigValidationError: missing i18n_path or other invalid settings
        """
        if config is None:
            config = Config.from_options(**options)
        elif options:
            raise TypeError("Pass either a Config or keyword options, not both")

        errors, warnings = config.validate()
        for warning in warnings:
            logger.debug(f"Config warning: {warning}")
        if errors:
            raise ConfigValidationError(errors)

        self.config = config
        self.baseline_loader = BaselineLoader()

    def collect(self) -> CollectionSession:
        """Start the collect phase of a run with an empty registry."""
        return CollectionSession()

    def resolve_i18n_path(self, context_dir: Union[str, Path]) -> Path:
        """Absolute translations directory; created when missing."""
        path = Path(self.config.paths.i18n)
        if not path.is_absolute():
            path = Path(context_dir) / path
        path = path.resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def configure_rules(
        self,
        rules: List[Dict[str, Any]],
        context_dir: Union[str, Path],
        package: str = PACKAGE_NAME,
    ) -> List[Dict[str, Any]]:
        """
        Pass plugin options to the package's loaders declared in rules.

        js loaders receive the parser toggles, vue loaders the shared options,
        excel loaders the locale. Rules are updated in place and returned.
        """
        shared = {
            'generate_report': self.config.report_enabled(),
            'i18n_path': str(self.resolve_i18n_path(context_dir)),
        }
        options_by_kind = {
            'js': {
                'parse_object_property': self.config.parser.parse_object_property,
                'parse_binary_expression': self.config.parser.parse_binary_expression,
                **shared,
            },
            'vue': shared,
            'excel': {'locale': self.config.parser.locale},
        }

        for kind in LOADER_KINDS:
            apply_loader_options(match_loaders(rules, loader_pattern(package, kind)), options_by_kind[kind])
        return rules

    def finalize(
        self,
        collected: CollectedFragments,
        live_module_ids: Iterable[str],
        build_inputs: Iterable[Union[BuildInput, Tuple[str, str]]] = (),
        sink: Optional[AssetSink] = None,
    ) -> Optional[FinalizeResult]:
        """
        Finalize phase: aggregate, diff against the baseline, emit the report.

        Args:
            collected: Snapshot returned by CollectionSession.complete()
            live_module_ids: Modules in the final output, in build order
            build_inputs: Build inputs searched for the baseline
            sink: Receives the rendered report

        Returns:
            FinalizeResult, or None when reports are disabled

        Raises:
            TypeError: collected is not a completed session snapshot
            ReportGenerationError: the baseline is ambiguous or malformed
        """
        if not isinstance(collected, CollectedFragments):
            raise TypeError(
                "finalize() expects the CollectedFragments returned by CollectionSession.complete()"
            )

        if not self.config.report_enabled():
            logger.debug("Report generation disabled, skipping finalize")
            return None

        collisions: List[KeyCollision] = []
        current = aggregate(collected.to_registry(), live_module_ids, on_collision=collisions.append)

        if self.config.report.warn_on_collision:
            for collision in collisions:
                logger.warning(
                    f"Key {collision.key} recorded as \"{collision.previous_value}\" in "
                    f"{collision.previous_module} and \"{collision.value}\" in {collision.module}; "
                    f"keeping the latter"
                )

        inputs = [_to_build_input(item) for item in build_inputs]
        try:
            baseline_input = self.baseline_loader.find(inputs)
            baseline = self.baseline_loader.read(baseline_input)
        except BaselineError as e:
            logger.error(f"Baseline could not be used: {e}")
            raise ReportGenerationError(str(e)) from e

        result = diff(current, baseline)

        asset = EmittedAsset(name=self.config.report.name, content=HTMLReporter.render(result))
        if sink is not None:
            sink(asset)

        logger.info(
            f"{len(current)} fragments: {len(result.added)} added, "
            f"{len(result.removed)} removed, {len(result.common)} unchanged"
        )

        return FinalizeResult(
            diff=result,
            asset=asset,
            current=current,
            collisions=collisions,
            baseline=baseline_input.identifier if baseline_input else None,
        )
