"""Locate and parse the previously published translation set."""

import re
import json
import yaml
from pathlib import Path
from typing import Any, Iterable, List, Optional, Pattern, Union
from dataclasses import dataclass

from ..utils.logging import get_logger

logger = get_logger('core.baseline')

# Spreadsheet imported as the default locale, e.g. "locales/app.xlsx?lang=zh&default=1"
DEFAULT_LOCALE_PATTERN = re.compile(r'\.xlsx?\?lang=\w+?&default=1$')

_EXPORT_RE = re.compile(r'\s*export\s+default\s+result\s*;?\s*$')
_DECLARATION_RE = re.compile(r'^(?:var|let|const)\s+result\s*=\s*(?P<body>.*?)\s*;?\s*$', re.DOTALL)
# JS string literals, either quote style, escapes included
_STRING_RE = re.compile(r'"(?:[^"\\]|\\.)*"|\'(?:[^\'\\]|\\.)*\'', re.DOTALL)
_ESCAPE_RE = re.compile(r'\\(.)|"', re.DOTALL)


class BaselineError(Exception):
    """The baseline artifact exists but cannot be used."""


class AmbiguousBaselineError(BaselineError):
    """More than one build input looks like the default-locale baseline."""

    def __init__(self, identifiers: List[str]):
        self.identifiers = identifiers
        super().__init__(
            "Multiple default-locale baselines found: " + ", ".join(identifiers)
        )


@dataclass(frozen=True)
class BuildInput:
    """One build input as reported by the host: its id and compiled text."""
    identifier: str
    source: str = ""

    @classmethod
    def from_file(cls, identifier: str, path: Union[str, Path]) -> 'BuildInput':
        """Build input whose compiled text is stored in a file."""
        return cls(identifier=identifier, source=Path(path).read_text(encoding='utf-8'))


def parse_baseline_module(payload: str) -> List[str]:
    """
    Extract translation values from a generated baseline module.

    The payload has the shape::

        var result = {"<key>": "<text>", ...};
        export default result;

    The export line and the declaration are stripped, the remaining literal
    is read as JSON, or as a YAML flow mapping when it uses unquoted keys or
    single quotes. Keys are dropped, values are returned in stored order.

    Raises:
        BaselineError: if the payload does not have that shape
    """
    if not isinstance(payload, str) or not payload.strip():
        raise BaselineError("Baseline module is empty")

    text = payload.strip()

    export = _EXPORT_RE.search(text)
    if not export:
        raise BaselineError("Baseline module does not end with 'export default result;'")
    text = text[:export.start()].strip()

    declaration = _DECLARATION_RE.match(text)
    if not declaration:
        raise BaselineError("Baseline module does not declare 'result'")
    body = declaration.group('body')

    data = _parse_literal(body)

    if not isinstance(data, dict):
        raise BaselineError(
            f"Baseline 'result' must be a flat record, got {type(data).__name__}"
        )

    values = []
    for key, value in data.items():
        if not isinstance(value, str):
            raise BaselineError(
                f"Baseline value for key '{key}' must be a string, got {type(value).__name__}"
            )
        values.append(value)

    return values


def _requote(match: re.Match) -> str:
    """Rewrite a JS string literal as a YAML double-quoted scalar."""
    def convert(escape: re.Match) -> str:
        char = escape.group(1)
        if char is None:
            return '\\"'
        return "'" if char == "'" else escape.group(0)

    return '"' + _ESCAPE_RE.sub(convert, match.group(0)[1:-1]) + '"'


def _parse_literal(body: str) -> Any:
    """
    Parse the record literal; JSON first, YAML flow syntax second.

    YAML does not decode backslash escapes inside single quotes, so
    single-quoted strings are turned into double-quoted ones first. An
    escape YAML does not know then fails the parse instead of being read
    as literal text.
    """
    try:
        return json.loads(body)
    except json.JSONDecodeError as json_error:
        logger.debug(f"Baseline literal is not JSON ({json_error}), trying YAML flow syntax")

    try:
        return yaml.safe_load(_STRING_RE.sub(_requote, body))
    except yaml.YAMLError as e:
        raise BaselineError(f"Baseline 'result' literal could not be parsed: {e}") from e


class BaselineLoader:
    """
    Finds the default-locale baseline among the build inputs.

    Zero candidates means there is no baseline yet and every current
    fragment is new. More than one candidate is refused instead of picking
    one arbitrarily.
    """

    def __init__(self, pattern: Optional[Pattern[str]] = None):
        self.pattern = pattern or DEFAULT_LOCALE_PATTERN

    def find(self, build_inputs: Iterable[BuildInput]) -> Optional[BuildInput]:
        """
        Return the baseline input, or None.

        Raises:
            AmbiguousBaselineError: more than one input matches
        """
        candidates = [item for item in build_inputs if self.pattern.search(item.identifier)]

        if not candidates:
            return None

        if len(candidates) > 1:
            raise AmbiguousBaselineError([item.identifier for item in candidates])

        return candidates[0]

    def load(self, build_inputs: Iterable[BuildInput]) -> List[str]:
        """
        Baseline fragment list, empty when no baseline input exists.

        Raises:
            BaselineError: the baseline is ambiguous or malformed
        """
        return self.read(self.find(build_inputs))

    def read(self, baseline: Optional[BuildInput]) -> List[str]:
        """
        Parse a baseline input found by find(); None gives an empty list.

        Raises:
            BaselineError: the payload is malformed
        """
        if baseline is None:
            logger.info("No default-locale baseline found, every fragment counts as new")
            return []

        try:
            values = parse_baseline_module(baseline.source)
        except BaselineError as e:
            raise BaselineError(f"{baseline.identifier}: {e}") from e

        logger.debug(f"Loaded {len(values)} baseline fragments from {baseline.identifier}")
        return values


def load_baseline(build_inputs: Iterable[BuildInput]) -> List[str]:
    """Load the baseline with the default naming convention."""
    return BaselineLoader().load(build_inputs)
