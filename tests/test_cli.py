"""Tests for CLI commands."""

import pytest
import json
import tempfile
import yaml
from argparse import Namespace
from pathlib import Path
from unittest.mock import patch

from i18n_collector.cli import (
    cmd_init,
    cmd_report,
    cmd_diff,
    load_manifest,
    load_and_validate_config,
    main,
)
from i18n_collector.utils.config import ConfigValidationError
from i18n_collector.utils.logging import reset_logger

BASELINE_ID = 'src/locales/app.xlsx?lang=zh&default=1'
BASELINE_SOURCE = 'var result = {"w": "World", "b": "Bye"};\nexport default result;'


def write_config(directory: Path, **report):
    data = {
        'paths': {'i18n': './i18n', 'output': './dist'},
        'report': {'formats': ['html'], **report},
    }
    path = directory / '.i18n-collector.yml'
    path.write_text(yaml.dump(data))
    return path


def write_manifest(directory: Path, inputs=None, live=None):
    data = {
        'modules': {
            'src/app.js': [['h', 'Hello'], ['w', 'World'], ['h', 'Hello']],
            'src/removed.js': [['x', 'Stale']],
        },
        'live': live if live is not None else ['src/app.js'],
        'inputs': inputs if inputs is not None else [{'id': BASELINE_ID, 'path': 'zh.js'}],
    }
    (directory / 'zh.js').write_text(BASELINE_SOURCE, encoding='utf-8')
    path = directory / 'manifest.json'
    path.write_text(json.dumps(data), encoding='utf-8')
    return path


def report_args(manifest, config, **overrides):
    values = dict(
        manifest=str(manifest),
        config=str(config),
        output=None,
        json=None,
        verbose=False,
        quiet=True,
        fail_on_added=False,
    )
    values.update(overrides)
    return Namespace(**values)


@pytest.fixture(autouse=True)
def clean_logger():
    yield
    reset_logger()


class TestCmdInit:
    """Test cases for cmd_init command."""

    def test_init_creates_config_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with patch('i18n_collector.cli.Path.cwd', return_value=Path(tmpdir)):
                result = cmd_init(Namespace(i18n_path='./lang', force=False))

            assert result == 0
            config_data = yaml.safe_load((Path(tmpdir) / '.i18n-collector.yml').read_text())
            assert config_data['paths']['i18n'] == './lang'

    def test_init_fails_without_force_if_exists(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            (Path(tmpdir) / '.i18n-collector.yml').write_text('existing: config')

            with patch('i18n_collector.cli.Path.cwd', return_value=Path(tmpdir)):
                result = cmd_init(Namespace(i18n_path='./i18n', force=False))

            assert result == 1

    def test_init_overwrites_with_force(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / '.i18n-collector.yml'
            config_path.write_text('old: config')

            with patch('i18n_collector.cli.Path.cwd', return_value=Path(tmpdir)):
                result = cmd_init(Namespace(i18n_path='./i18n', force=True))

            assert result == 0
            assert 'old' not in yaml.safe_load(config_path.read_text())


class TestLoadAndValidateConfig:
    """Test cases for load_and_validate_config."""

    def test_missing_i18n_path(self, capsys):
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / 'config.yml'
            config_path.write_text(yaml.dump({'paths': {'output': './dist'}}))

            with pytest.raises(ConfigValidationError):
                load_and_validate_config(config_path)

        assert 'paths.i18n' in capsys.readouterr().out

    def test_valid(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            config = load_and_validate_config(write_config(Path(tmpdir)))

        assert config.paths.i18n == './i18n'


class TestLoadManifest:
    """Test cases for load_manifest."""

    def test_reads_inputs_from_files(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            manifest = load_manifest(write_manifest(Path(tmpdir)))

            assert manifest.context == Path(tmpdir) / '.'

        assert manifest.live == ['src/app.js']
        assert manifest.inputs[0].identifier == BASELINE_ID
        assert manifest.inputs[0].source == BASELINE_SOURCE

    def test_live_defaults_to_all_modules(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / 'manifest.json'
            path.write_text(json.dumps({'modules': {'a.js': [], 'b.js': []}}))

            manifest = load_manifest(path)

        assert manifest.live == ['a.js', 'b.js']
        assert manifest.inputs == []

    def test_inline_source(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / 'manifest.json'
            path.write_text(json.dumps({'inputs': [{'id': BASELINE_ID, 'source': BASELINE_SOURCE}]}))

            manifest = load_manifest(path)

        assert manifest.inputs[0].source == BASELINE_SOURCE

    @pytest.mark.parametrize('data', [
        [],
        {'modules': []},
        {'modules': {'a.js': [['only-key']]}},
        {'live': 'a.js'},
        {'inputs': [{'source': 'x'}]},
    ])
    def test_invalid_shape(self, data):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / 'manifest.json'
            path.write_text(json.dumps(data))

            with pytest.raises(ValueError):
                load_manifest(path)


class TestCmdReport:
    """Test cases for cmd_report command."""

    def test_writes_html_report(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            tmp = Path(tmpdir)
            args = report_args(write_manifest(tmp), write_config(tmp))

            result = cmd_report(args)

            assert result == 0
            html = (tmp / 'dist' / 'i18n.html').read_text(encoding='utf-8')
            assert '<span>Added: 1</span>' in html
            assert '<span>Removed: 1</span>' in html
            assert '<span>Same: 1</span>' in html
            assert 'Stale' not in html

    def test_output_and_json(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            tmp = Path(tmpdir)
            args = report_args(
                write_manifest(tmp),
                write_config(tmp),
                output=str(tmp / 'out'),
                json=str(tmp / 'out' / 'report.json'),
            )

            result = cmd_report(args)

            assert result == 0
            assert (tmp / 'out' / 'i18n.html').exists()
            data = json.loads((tmp / 'out' / 'report.json').read_text(encoding='utf-8'))
            assert data['added'] == ['Hello']
            assert data['metadata']['baseline'] == BASELINE_ID

    def test_report_even_when_disabled_in_config(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            tmp = Path(tmpdir)
            args = report_args(write_manifest(tmp), write_config(tmp, enabled=False))

            assert cmd_report(args) == 0
            assert (tmp / 'dist' / 'i18n.html').exists()

    def test_fail_on_added(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            tmp = Path(tmpdir)
            args = report_args(write_manifest(tmp), write_config(tmp), fail_on_added=True)

            assert cmd_report(args) == 1

    def test_malformed_baseline(self, capsys):
        with tempfile.TemporaryDirectory() as tmpdir:
            tmp = Path(tmpdir)
            manifest = write_manifest(tmp, inputs=[{'id': BASELINE_ID, 'source': 'broken'}])

            result = cmd_report(report_args(manifest, write_config(tmp)))

            assert result == 1
            assert not (tmp / 'dist' / 'i18n.html').exists()

        assert 'Report not generated' in capsys.readouterr().out

    def test_missing_manifest(self, capsys):
        with tempfile.TemporaryDirectory() as tmpdir:
            tmp = Path(tmpdir)
            args = report_args(tmp / 'nope.json', write_config(tmp))

            assert cmd_report(args) == 1

        assert 'Cannot read manifest' in capsys.readouterr().out

    def test_invalid_config(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            tmp = Path(tmpdir)
            config = tmp / 'config.yml'
            config.write_text(yaml.dump({'paths': {'output': './dist'}}))

            assert cmd_report(report_args(write_manifest(tmp), config)) == 1

    def test_console_summary(self, capsys):
        with tempfile.TemporaryDirectory() as tmpdir:
            tmp = Path(tmpdir)
            args = report_args(write_manifest(tmp), write_config(tmp), quiet=False, verbose=True)

            assert cmd_report(args) == 0

        output = capsys.readouterr().out
        assert 'I18N FRAGMENT REPORT' in output
        assert 'Bye' in output


class TestCmdDiff:
    """Test cases for cmd_diff command."""

    def diff_args(self, **overrides):
        values = dict(
            current=None,
            baseline=None,
            output=None,
            format=None,
            common=False,
            limit=50,
            fail_on_added=False,
        )
        values.update(overrides)
        return Namespace(**values)

    def test_print_diff(self, capsys):
        with tempfile.TemporaryDirectory() as tmpdir:
            tmp = Path(tmpdir)
            (tmp / 'current.json').write_text(json.dumps(['Hello', 'World']))
            (tmp / 'zh.js').write_text(BASELINE_SOURCE)

            result = cmd_diff(self.diff_args(current=str(tmp / 'current.json'), baseline=str(tmp / 'zh.js')))

        assert result == 0
        output = capsys.readouterr().out
        assert 'Hello' in output
        assert 'Bye' in output

    def test_export_by_suffix(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            tmp = Path(tmpdir)
            (tmp / 'current.json').write_text(json.dumps(['Hello', 'World']))
            (tmp / 'zh.js').write_text(BASELINE_SOURCE)

            result = cmd_diff(self.diff_args(
                current=str(tmp / 'current.json'),
                baseline=str(tmp / 'zh.js'),
                output=str(tmp / 'diff.json'),
            ))

            data = json.loads((tmp / 'diff.json').read_text(encoding='utf-8'))

        assert result == 0
        assert data['added'] == ['Hello']
        assert data['removed'] == ['Bye']
        assert data['common'] == ['World']

    def test_unknown_suffix_exports_markdown(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            tmp = Path(tmpdir)
            (tmp / 'current.json').write_text(json.dumps(['Hello']))

            result = cmd_diff(self.diff_args(
                current=str(tmp / 'current.json'),
                output=str(tmp / 'diff.html'),
            ))

            content = (tmp / 'diff.html').read_text(encoding='utf-8')

        assert result == 0
        assert content.startswith('# Fragment Diff')
        assert '- `Hello`' in content

    def test_without_baseline(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            tmp = Path(tmpdir)
            (tmp / 'current.json').write_text(json.dumps(['Hello']))

            result = cmd_diff(self.diff_args(current=str(tmp / 'current.json'), fail_on_added=True))

        assert result == 1

    def test_invalid_current(self, capsys):
        with tempfile.TemporaryDirectory() as tmpdir:
            tmp = Path(tmpdir)
            (tmp / 'current.json').write_text(json.dumps({'not': 'a list'}))

            result = cmd_diff(self.diff_args(current=str(tmp / 'current.json')))

        assert result == 1
        assert 'Cannot read current fragments' in capsys.readouterr().out

    def test_invalid_baseline(self, capsys):
        with tempfile.TemporaryDirectory() as tmpdir:
            tmp = Path(tmpdir)
            (tmp / 'current.json').write_text(json.dumps(['Hello']))
            (tmp / 'zh.js').write_text('not a module')

            result = cmd_diff(self.diff_args(current=str(tmp / 'current.json'), baseline=str(tmp / 'zh.js')))

        assert result == 1
        assert 'Cannot read baseline' in capsys.readouterr().out


class TestMain:
    """Test cases for the argument parser."""

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert 'usage' in capsys.readouterr().out.lower()

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(['--version'])

        assert exc_info.value.code == 0
        assert 'i18n-collector' in capsys.readouterr().out

    def test_diff_dispatch(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            tmp = Path(tmpdir)
            (tmp / 'current.json').write_text(json.dumps([]))

            assert main(['diff', '--current', str(tmp / 'current.json')]) == 0

    def test_report_requires_manifest(self):
        with pytest.raises(SystemExit):
            main(['report'])
