"""Validation utilities."""

import re


def is_valid_language_code(code: str) -> bool:
    """
    Validate a locale identifier.

    Examples: en, zh, pt-BR, zh-Hans, zh_CN
    """
    if not code or not isinstance(code, str):
        return False

    pattern = r'^[a-z]{2,3}([-_][A-Za-z]{2,4})?$'
    return bool(re.match(pattern, code))


def is_valid_asset_name(name: str, extension: str = '.html') -> bool:
    """
    Validate an emitted asset name.

    Asset names are plain file names relative to the output directory:
    no directory separators, no parent references.
    """
    if not name or not isinstance(name, str):
        return False

    if '/' in name or '\\' in name or name.startswith('.'):
        return False

    return name.endswith(extension) and len(name) > len(extension)
