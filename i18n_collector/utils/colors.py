"""ANSI color codes for terminal output."""

import os
import sys


class Colors:
    """ANSI color codes for diff and report output."""

    HEADER = '\033[95m'
    OKBLUE = '\033[94m'
    OKCYAN = '\033[96m'
    OKGREEN = '\033[92m'
    WARNING = '\033[93m'
    FAIL = '\033[91m'
    DIM = '\033[2m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'

    @staticmethod
    def enabled(stream=None) -> bool:
        """Whether ANSI codes should be written to the given stream."""
        if os.environ.get('NO_COLOR'):
            return False
        stream = stream or sys.stdout
        return hasattr(stream, 'isatty') and stream.isatty()

    @classmethod
    def success(cls, text: str) -> str:
        """Return text in green color."""
        return f"{cls.OKGREEN}{text}{cls.ENDC}"

    @classmethod
    def error(cls, text: str) -> str:
        """Return text in red color."""
        return f"{cls.FAIL}{text}{cls.ENDC}"

    @classmethod
    def warning(cls, text: str) -> str:
        """Return text in yellow color."""
        return f"{cls.WARNING}{text}{cls.ENDC}"

    @classmethod
    def info(cls, text: str) -> str:
        """Return text in cyan color."""
        return f"{cls.OKCYAN}{text}{cls.ENDC}"

    @classmethod
    def bold(cls, text: str) -> str:
        """Return text in bold."""
        return f"{cls.BOLD}{text}{cls.ENDC}"

    @classmethod
    def added(cls, text: str) -> str:
        """Fragment that is new compared to the baseline."""
        return cls.success(f"+ {text}")

    @classmethod
    def removed(cls, text: str) -> str:
        """Fragment that only exists in the baseline."""
        return cls.error(f"- {text}")

    @classmethod
    def common(cls, text: str) -> str:
        """Fragment present on both sides."""
        return f"{cls.DIM}  {text}{cls.ENDC}"
