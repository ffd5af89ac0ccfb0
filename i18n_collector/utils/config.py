"""Configuration management for the fragment collector."""

import os
import yaml
from pathlib import Path
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, field

from .validators import is_valid_language_code, is_valid_asset_name

CONFIG_FILE_NAME = '.i18n-collector.yml'

# Environment variables consulted when report.enabled is left unset
ENV_VARIABLES = ('I18N_ENV', 'NODE_ENV')


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__(f"Configuration validation failed: {'; '.join(errors)}")


class ConfigValidationWarning:
    """Represents a configuration warning (non-fatal)."""

    def __init__(self, message: str):
        self.message = message

    def __str__(self):
        return self.message


@dataclass
class PathsConfig:
    """Paths configuration."""
    i18n: Optional[str] = None  # required: where collected translations are written
    output: str = "./dist"      # where reports are emitted by the CLI


@dataclass
class ParserConfig:
    """Options handed through to the module loaders, not interpreted here."""
    locale: Optional[str] = None  # None: first column of the spreadsheet
    parse_object_property: bool = False
    parse_binary_expression: bool = False


@dataclass
class ReportConfig:
    """Report configuration."""
    enabled: Optional[bool] = None  # None: enabled unless running in production
    name: str = "i18n.html"
    formats: List[str] = field(default_factory=lambda: ["html"])
    warn_on_collision: bool = True


@dataclass
class Config:
    """Main configuration class."""
    paths: PathsConfig = field(default_factory=PathsConfig)
    parser: ParserConfig = field(default_factory=ParserConfig)
    report: ReportConfig = field(default_factory=ReportConfig)

    @classmethod
    def from_file(cls, config_path: Optional[Path] = None) -> 'Config':
        """Load configuration from YAML file."""
        if config_path is None:
            config_path = Path.cwd() / CONFIG_FILE_NAME

            if not config_path.exists():
                return cls()

        with open(config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """Build configuration from the nested mapping used in the YAML file."""
        return cls(
            paths=PathsConfig(**(data.get('paths') or {})),
            parser=ParserConfig(**(data.get('parser') or {})),
            report=ReportConfig(**(data.get('report') or {})),
        )

    @classmethod
    def from_options(
        cls,
        i18n_path: Optional[str] = None,
        locale: Optional[str] = None,
        parse_object_property: bool = False,
        parse_binary_expression: bool = False,
        generate_report: Optional[bool] = None,
        report_name: str = "i18n.html",
        warn_on_collision: bool = True,
    ) -> 'Config':
        """Build configuration from the flat plugin options."""
        return cls(
            paths=PathsConfig(i18n=str(i18n_path) if i18n_path is not None else None),
            parser=ParserConfig(
                locale=locale,
                parse_object_property=parse_object_property,
                parse_binary_expression=parse_binary_expression,
            ),
            report=ReportConfig(
                enabled=generate_report,
                name=report_name,
                warn_on_collision=warn_on_collision,
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {
            'paths': {
                'i18n': self.paths.i18n,
                'output': self.paths.output,
            },
            'parser': {
                'locale': self.parser.locale,
                'parse_object_property': self.parser.parse_object_property,
                'parse_binary_expression': self.parser.parse_binary_expression,
            },
            'report': {
                'enabled': self.report.enabled,
                'name': self.report.name,
                'formats': self.report.formats,
                'warn_on_collision': self.report.warn_on_collision,
            },
        }

    def save(self, config_path: Optional[Path] = None):
        """Save configuration to YAML file."""
        if config_path is None:
            config_path = Path.cwd() / CONFIG_FILE_NAME

        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False, allow_unicode=True)

    def report_enabled(self) -> bool:
        """
        Whether the finalize step should produce a report.

        An explicit report.enabled wins; otherwise the report is produced
        unless I18N_ENV (or NODE_ENV) says 'production'.
        """
        if self.report.enabled is not None:
            return self.report.enabled

        for name in ENV_VARIABLES:
            value = os.environ.get(name)
            if value:
                return value.strip().lower() != 'production'

        return True

    def validate(self, raise_on_error: bool = False) -> tuple[List[str], List[ConfigValidationWarning]]:
        """
        Validate configuration and return errors and warnings.

        Args:
            raise_on_error: If True, raise ConfigValidationError on validation errors

        Returns:
            Tuple of (errors, warnings) lists
        """
        errors = []
        warnings = []

        if not self.paths.i18n:
            errors.append("paths.i18n is required (directory for collected translations)")

        if self.parser.locale is not None and not is_valid_language_code(self.parser.locale):
            errors.append(
                f"Invalid locale: '{self.parser.locale}'. "
                f"Use a language code such as 'zh', 'en' or 'pt-BR'"
            )

        if not is_valid_asset_name(self.report.name):
            errors.append(
                f"report.name must be a plain .html file name, got '{self.report.name}'"
            )

        valid_formats = ['html', 'json', 'console']
        for fmt in self.report.formats:
            if fmt not in valid_formats:
                warnings.append(ConfigValidationWarning(
                    f"Unknown report format: '{fmt}'. Valid options: {', '.join(valid_formats)}"
                ))

        if 'html' not in self.report.formats:
            warnings.append(ConfigValidationWarning(
                "report.formats does not include 'html'; no report page will be written by the CLI"
            ))

        if raise_on_error and errors:
            raise ConfigValidationError(errors)

        return errors, warnings


def create_default_config(i18n_path: str = './i18n') -> Config:
    """Create default configuration."""
    config = Config()
    config.paths.i18n = i18n_path
    return config
