"""Command-line interface for the fragment collector."""

import sys
import json
import argparse
from pathlib import Path
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field

from .__version__ import __version__
from .utils.colors import Colors
from .utils.config import Config, CONFIG_FILE_NAME, create_default_config, ConfigValidationError
from .utils.logging import configure_logging
from .core.baseline import BaselineError, BuildInput, parse_baseline_module
from .core.collector import I18nPlugin, DirectoryAssetSink, ReportGenerationError
from .features.diff import EXPORT_FORMATS, LocalizationDiff
from .reports.json_reporter import JSONReporter
from .reports.console_reporter import ConsoleReporter


@dataclass
class BuildManifest:
    """What a host build reports at finalize time, stored as JSON."""
    modules: Dict[str, List[List[str]]] = field(default_factory=dict)
    live: List[str] = field(default_factory=list)
    inputs: List[BuildInput] = field(default_factory=list)
    context: Path = field(default_factory=Path.cwd)


def load_manifest(manifest_path: Path) -> BuildManifest:
    """
    Load a build manifest.

    Format:
        {
          "context": ".",
          "modules": {"src/app.js": [["<key>", "<text>"], ...]},
          "live": ["src/app.js"],
          "inputs": [{"id": "locales/app.xlsx?lang=zh&default=1", "path": "out/zh.js"}]
        }

    "live" defaults to every recorded module. An input carries its compiled
    text either inline ("source") or in a file ("path", relative to the
    manifest).

    Raises:
        ValueError: the manifest does not have this shape
    """
    with open(manifest_path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError("Manifest must be a JSON object")

    base_dir = manifest_path.parent

    modules = data.get('modules')
    if modules is None:
        modules = {}
    if not isinstance(modules, dict):
        raise ValueError("'modules' must map module ids to [key, text] pairs")
    for module_id, entries in modules.items():
        if not isinstance(entries, list) or any(
            not isinstance(entry, list) or len(entry) != 2 for entry in entries
        ):
            raise ValueError(f"Entries of module '{module_id}' must be [key, text] pairs")

    live = data.get('live')
    if live is None:
        live = list(modules)
    if not isinstance(live, list):
        raise ValueError("'live' must be a list of module ids")

    inputs = []
    for item in data.get('inputs') or []:
        if not isinstance(item, dict) or 'id' not in item:
            raise ValueError("Each input needs an 'id'")
        if 'path' in item:
            inputs.append(BuildInput.from_file(item['id'], base_dir / item['path']))
        else:
            inputs.append(BuildInput(identifier=item['id'], source=item.get('source', '')))

    context = base_dir / data.get('context', '.')

    return BuildManifest(modules=modules, live=live, inputs=inputs, context=context)


def load_and_validate_config(
    config_path: Optional[Path] = None,
    validate: bool = True,
    verbose: bool = False
) -> Config:
    """
    Load configuration and optionally validate it.

    Args:
        config_path: Explicit config file; default is ./.i18n-collector.yml
        validate: Whether to validate the config
        verbose: Whether to print warnings

    Returns:
        Loaded Config object

    Raises:
        ConfigValidationError: If validation fails with errors
    """
    config = Config.from_file(config_path)

    if validate:
        errors, warnings = config.validate()

        if verbose and warnings:
            for warning in warnings:
                print(f"{Colors.warning('⚠️')}  Config warning: {warning}")

        if errors:
            print(f"{Colors.error('❌')} Configuration errors:")
            for error in errors:
                print(f"   • {error}")
            raise ConfigValidationError(errors)

    return config


def cmd_init(args):
    """Initialize configuration file."""
    config_path = Path.cwd() / CONFIG_FILE_NAME

    if config_path.exists() and not args.force:
        print(f"{Colors.error('❌')} Config already exists: {config_path}")
        print("   Use --force to overwrite")
        return 1

    config = create_default_config(args.i18n_path)
    config.save(config_path)

    print(f"{Colors.success('✅')} Created: {config_path}")
    print(f"\n{Colors.bold('Next steps:')}")
    print(f"1. Edit {CONFIG_FILE_NAME} to configure your project")
    print("2. Run: i18n-collector report --manifest build-manifest.json")

    return 0


def cmd_report(args):
    """Build the fragment report from a build manifest."""
    configure_logging(verbose=args.verbose, quiet=args.quiet)

    try:
        config = load_and_validate_config(
            config_path=Path(args.config) if args.config else None,
            verbose=args.verbose
        )
    except ConfigValidationError:
        return 1

    manifest_path = Path(args.manifest)
    try:
        manifest = load_manifest(manifest_path)
    except (OSError, ValueError) as e:
        print(f"{Colors.error('❌')} Cannot read manifest {manifest_path}: {e}")
        return 1

    # Asked for explicitly, so not subject to the production switch
    config.report.enabled = True
    plugin = I18nPlugin(config)

    session = plugin.collect()
    for module_id, entries in manifest.modules.items():
        session.record(module_id, [tuple(entry) for entry in entries])

    output_dir = Path(args.output) if args.output else manifest.context / config.paths.output
    sink = DirectoryAssetSink(output_dir) if 'html' in config.report.formats else None

    try:
        result = plugin.finalize(session.complete(), manifest.live, manifest.inputs, sink)
    except ReportGenerationError as e:
        print(f"{Colors.error('❌')} Report not generated: {e}")
        return 1

    if sink is not None:
        for path in sink.written:
            print(f"{Colors.success('✓')} HTML report: {path}")

    if 'json' in config.report.formats or args.json:
        JSONReporter.generate(
            result=result.diff,
            output_path=Path(args.json) if args.json else output_dir / 'i18n.json',
            collisions=result.collisions,
            baseline=result.baseline,
        )

    if 'console' in config.report.formats or not args.quiet:
        ConsoleReporter.print_full_report(
            result=result.diff,
            collisions=result.collisions,
            show_details=args.verbose
        )

    if args.fail_on_added and result.diff.added:
        return 1

    return 0


def _read_fragment_list(path: Path) -> List[str]:
    with open(path, 'r', encoding='utf-8') as f:
        data: Any = json.load(f)

    if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
        raise ValueError("expected a JSON list of strings")

    return data


def cmd_diff(args):
    """Compare a fragment list with a baseline module."""
    try:
        current = _read_fragment_list(Path(args.current))
    except (OSError, ValueError) as e:
        print(f"{Colors.error('❌')} Cannot read current fragments {args.current}: {e}")
        return 1

    if args.baseline:
        try:
            baseline = parse_baseline_module(Path(args.baseline).read_text(encoding='utf-8'))
        except (OSError, BaselineError) as e:
            print(f"{Colors.error('❌')} Cannot read baseline {args.baseline}: {e}")
            return 1
    else:
        baseline = []

    differ = LocalizationDiff()
    result = differ.compare(current, baseline)

    if args.output:
        output_path = Path(args.output)
        format = args.format
        if format is None:
            suffix = output_path.suffix.lstrip('.')
            format = suffix if suffix in EXPORT_FORMATS else 'md'
        differ.export_diff(result, output_path, format=format)
    else:
        differ.print_diff(result, show_common=args.common, limit=args.limit)

    if args.fail_on_added and result.added:
        return 1

    return 0


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog='i18n-collector',
        description='Collect translatable fragments from a build and diff them against the published set',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # init command
    init_parser = subparsers.add_parser('init', help='Initialize configuration file')
    init_parser.add_argument('--i18n-path', default='./i18n',
                             help='Directory for collected translations (default: ./i18n)')
    init_parser.add_argument('--force', action='store_true', help='Overwrite existing config')

    # report command
    report_parser = subparsers.add_parser('report', help='Generate the fragment report from a build manifest')
    report_parser.add_argument('--manifest', '-m', required=True, metavar='PATH', help='Build manifest (JSON)')
    report_parser.add_argument('--config', '-c', metavar='PATH', help=f'Config file (default: ./{CONFIG_FILE_NAME})')
    report_parser.add_argument('--output', '-o', metavar='DIR', help='Output directory for i18n.html')
    report_parser.add_argument('--json', metavar='PATH', help='Also write a JSON report')
    report_parser.add_argument('--verbose', '-v', action='store_true', help='Show added/removed fragments')
    report_parser.add_argument('--quiet', '-q', action='store_true', help='Minimal output')
    report_parser.add_argument('--fail-on-added', action='store_true',
                               help='Exit with error if untranslated fragments were added')

    # diff command
    diff_parser = subparsers.add_parser('diff', help='Diff a fragment list against a baseline module')
    diff_parser.add_argument('--current', required=True, metavar='PATH', help='JSON list of current fragments')
    diff_parser.add_argument('--baseline', metavar='PATH', help='Generated baseline module (default: none)')
    diff_parser.add_argument('--output', '-o', metavar='PATH', help='Export diff to file')
    diff_parser.add_argument('--format', '-f', choices=EXPORT_FORMATS, help='Output format')
    diff_parser.add_argument('--common', action='store_true', help='Also list unchanged fragments')
    diff_parser.add_argument('--limit', type=int, default=50, help='Max entries to show (default: 50)')
    diff_parser.add_argument('--fail-on-added', action='store_true',
                             help='Exit with error if untranslated fragments were added')

    args = parser.parse_args(argv)

    if args.command == 'init':
        return cmd_init(args)
    elif args.command == 'report':
        return cmd_report(args)
    elif args.command == 'diff':
        return cmd_diff(args)
    else:
        parser.print_help()
        return 0


if __name__ == '__main__':
    sys.exit(main())
