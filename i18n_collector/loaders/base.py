"""Base class for module loaders that feed the fragment registry."""

import hashlib
from abc import ABC, abstractmethod
from pathlib import PurePosixPath
from typing import List

from ..core.registry import FragmentEntry


def derive_key(text: str) -> str:
    """Stable key for a fragment: md5 hex digest of its UTF-8 text."""
    return hashlib.md5(text.encode('utf-8')).hexdigest()


class BaseFragmentLoader(ABC):
    """
    Base loader for framework-specific fragment extraction.

    Subclasses only know how to find translatable text in a module's source;
    keying and recording into the collection session is shared.
    """

    exclude_dirs = {
        'node_modules', 'dist', 'build', '.git', 'coverage', 'vendor',
    }

    @abstractmethod
    def extract_fragments(self, source: str) -> List[str]:
        """
        Return the translatable texts found in a module, in source order.

        Args:
            source: Module source text

        Returns:
            List of texts; the same text may appear more than once
        """
        pass

    def should_exclude_module(self, module_id: str) -> bool:
        """
        Check if a module should not be scanned.

        Args:
            module_id: Module identifier, possibly with a resource query

        Returns:
            True for vendored or generated output directories
        """
        path = module_id.split('?', 1)[0].replace('\\', '/')
        return any(part in self.exclude_dirs for part in PurePosixPath(path).parts)

    def process(self, module_id: str, source: str, session) -> List[FragmentEntry]:
        """
        Extract, key and record the fragments of one module.

        Excluded modules are recorded with no entries so a stale recording
        from an earlier pass over the same module cannot survive.

        Args:
            module_id: Module identifier
            source: Module source text
            session: CollectionSession (or registry) exposing record()

        Returns:
            Recorded entries
        """
        if self.should_exclude_module(module_id):
            entries = []
        else:
            entries = [
                FragmentEntry(key=derive_key(text), value=text)
                for text in self.extract_fragments(source)
            ]

        session.record(module_id, entries)
        return entries
