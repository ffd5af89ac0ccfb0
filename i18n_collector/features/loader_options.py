"""Hand plugin options to the fragment loaders declared in build rules."""

import re
from typing import Any, Dict, List, Optional, Pattern

LOADER_KINDS = ('js', 'vue', 'excel')


def loader_pattern(package: str, kind: str) -> Pattern[str]:
    """
    Regex matching the loader entry point of a package.

    Matches '<package>/loader/for-<kind>.js' with either path separator,
    e.g. 'node_modules/i18n-collector/loader/for-js.js'.
    """
    return re.compile(
        rf'{re.escape(package)}(\/|\\)loader(\/|\\)for-{re.escape(kind)}\.js$'
    )


def match_loaders(rules: List[Dict[str, Any]], pattern: Pattern[str]) -> List[Dict[str, Any]]:
    """
    Collect loader entries matching pattern from a rule tree.

    Nested 'oneOf' groups are searched recursively. For a rule with a
    'use' list only the first matching entry is taken. The returned dicts
    are the entries inside rules, so updating them updates the rules.
    """
    found = []

    for rule in rules:
        one_of = rule.get('oneOf')
        use = rule.get('use')

        if one_of:
            found.extend(match_loaders(one_of, pattern))
        elif use:
            for entry in use:
                if isinstance(entry, dict) and pattern.search(str(entry.get('loader', ''))):
                    found.append(entry)
                    break

    return found


def apply_loader_options(loaders: List[Dict[str, Any]], options: Optional[Dict[str, Any]] = None) -> None:
    """Merge options over each loader's existing options (options win)."""
    for loader in loaders:
        loader['options'] = {
            **(loader.get('options') or {}),
            **(options or {}),
        }
