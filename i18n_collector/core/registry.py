"""Run-scoped registry of fragments recorded per module."""

from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union
from dataclasses import dataclass


@dataclass(frozen=True)
class FragmentEntry:
    """A translatable text and the stable key it was recorded under."""
    key: str
    value: str


EntryLike = Union[FragmentEntry, Tuple[str, str]]


def _to_entry(item: EntryLike) -> FragmentEntry:
    if isinstance(item, FragmentEntry):
        return item
    key, value = item
    return FragmentEntry(key=str(key), value=str(value))


class FragmentRegistry:
    """
    Module id -> ordered fragment entries for one compilation run.

    Loaders write one module at a time; recording a module again replaces
    what it recorded before. The registry keeps every module it has seen,
    including ones that end up outside the final output: filtering by
    liveness is the aggregator's job.

    A registry must be created per run. Nothing here is module-global.
    """

    def __init__(self):
        self._modules: Dict[str, List[FragmentEntry]] = {}

    def record(self, module_id: str, entries: Optional[Iterable[EntryLike]] = None) -> None:
        """
        Record the fragments found in a module.

        Args:
            module_id: Module identifier (resource path, possibly with query)
            entries: FragmentEntry objects or (key, value) pairs; None or empty
                means the module contributed no fragments
        """
        self._modules[module_id] = [_to_entry(item) for item in (entries or ())]

    def all_module_ids(self) -> List[str]:
        """Every module recorded in this run, in first-recorded order."""
        return list(self._modules)

    def entries_for(self, module_id: str) -> List[FragmentEntry]:
        """Entries recorded for a module, or an empty list."""
        return list(self._modules.get(module_id, ()))

    def clear(self) -> None:
        self._modules.clear()

    def __contains__(self, module_id: object) -> bool:
        return module_id in self._modules

    def __len__(self) -> int:
        return len(self._modules)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._modules))
