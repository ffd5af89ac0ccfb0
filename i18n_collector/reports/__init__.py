"""Report modules."""

from .html_reporter import HTMLReporter, escape_html, render
from .json_reporter import JSONReporter
from .console_reporter import ConsoleReporter

__all__ = [
    'HTMLReporter',
    'escape_html',
    'render',
    'JSONReporter',
    'ConsoleReporter',
]
