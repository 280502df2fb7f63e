"""Tests for the mk command line end to end."""

from pathlib import Path
from urllib.parse import parse_qs, urlsplit

import pytest
from pytest_mock import MockerFixture

import mk.main as main_module
from mk.config import MkConfig
from mk.usage import USAGE

from .conftest import MkCommand


class TestRun:
    """Tests for mk.main.run."""

    def test_refresh_frontmost(self, run_mk: MkCommand, tmp_path: Path) -> None:
        result = run_mk(['--refresh'], tmp_path)

        assert result.returncode == 0
        assert result.locators == ['x-marked-3://refresh']

    @pytest.mark.parametrize('target', ['all', 'notes.md'])
    def test_refresh_target(self, run_mk: MkCommand, tmp_path: Path, target: str) -> None:
        result = run_mk(['--refresh', target], tmp_path)

        assert result.locators == [f'x-marked-3://refresh?file={target}']

    def test_open_existing_file(self, run_mk: MkCommand, tmp_path: Path) -> None:
        (tmp_path / 'somefile.md').write_text('# Hi')

        result = run_mk(['somefile.md'], tmp_path)

        assert result.returncode == 0
        assert result.locators == [f'x-marked-3://open?file={tmp_path.resolve() / "somefile.md"}']
        assert result.stderr == ''

    def test_open_with_raise(self, run_mk: MkCommand, tmp_path: Path) -> None:
        (tmp_path / 'somefile.md').write_text('# Hi')

        result = run_mk(['--raise', 'somefile.md'], tmp_path)

        query = parse_qs(urlsplit(result.locators[0]).query)
        assert query == {'file': [str(tmp_path.resolve() / 'somefile.md')], 'raise': ['true']}

    def test_open_missing_file(self, run_mk: MkCommand, tmp_path: Path) -> None:
        result = run_mk(['somefile.md'], tmp_path)

        assert result.returncode == 1
        assert result.locators == []
        assert result.stderr.splitlines() == [
            f'Error: File does not exist: {tmp_path.resolve() / "somefile.md"}',
        ]

    def test_add_style_missing(self, run_mk: MkCommand, tmp_path: Path) -> None:
        result = run_mk(['--add-style', 'custom.css'], tmp_path)

        assert result.returncode == 1
        assert result.locators == []
        assert result.stderr.startswith('Error: CSS file does not exist:')

    def test_dojs_with_target(self, run_mk: MkCommand, tmp_path: Path) -> None:
        result = run_mk(['--dojs', 'x()', 'all'], tmp_path)

        query = parse_qs(urlsplit(result.locators[0]).query)
        assert query == {'js': ['x()'], 'file': ['all']}

    def test_dojs_alone(self, run_mk: MkCommand, tmp_path: Path) -> None:
        result = run_mk(['--dojs', 'x()'], tmp_path)

        query = parse_qs(urlsplit(result.locators[0]).query)
        assert query == {'js': ['x()']}

    def test_defaults_with_warning(self, run_mk: MkCommand, tmp_path: Path) -> None:
        result = run_mk(['--defaults', 'a=1', 'oops', 'a=2', 'b=x y'], tmp_path)

        assert result.returncode == 0
        assert parse_qs(urlsplit(result.locators[0]).query) == {'a': ['2'], 'b': ['x y']}
        assert result.stderr.splitlines() == ["Warning: Invalid defaults format 'oops', expected KEY=VALUE"]

    def test_version(self, run_mk: MkCommand, tmp_path: Path, mocker: MockerFixture) -> None:
        mocker.patch.object(main_module, '__version__', '3.1.4')

        result = run_mk(['--version', '--dingus'], tmp_path)

        assert result.returncode == 0
        assert result.stdout == 'mk version 3.1.4\n'
        assert result.locators == []

    def test_no_arguments_on_terminal(self, run_mk: MkCommand, tmp_path: Path) -> None:
        result = run_mk([], tmp_path, interactive=True)

        assert result.returncode == 0
        assert result.stdout == USAGE
        assert result.locators == []
        assert result.clipboard == []

    def test_no_arguments_with_pipe(self, run_mk: MkCommand, tmp_path: Path) -> None:
        result = run_mk([], tmp_path, stdin=b'# Streamed\n', interactive=False)

        assert result.returncode == 0
        assert result.clipboard == [('mkStreamingPreview', '# Streamed\n')]
        assert result.locators == ['x-marked-3://stream']

    def test_undecodable_stdin(self, run_mk: MkCommand, tmp_path: Path) -> None:
        result = run_mk(['-'], tmp_path, stdin=b'\xff\xfe')

        assert result.returncode == 1
        assert result.locators == []
        assert result.stderr == 'Error: Could not read from standard input\n'

    def test_config_scheme(
        self,
        run_mk: MkCommand,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        config_file = tmp_path / 'mk.yaml'
        config_file.write_text('scheme: x-marked\npasteboard: otherBoard\n')
        monkeypatch.setenv('MK_CONFIG', str(config_file))

        result = run_mk(['-'], tmp_path, stdin=b'x')

        assert result.clipboard == [('otherBoard', 'x')]
        assert result.locators == ['x-marked://stream']

    def test_invalid_config(
        self,
        run_mk: MkCommand,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        config_file = tmp_path / 'mk.yaml'
        config_file.write_text('colour: blue\n')
        monkeypatch.setenv('MK_CONFIG', str(config_file))

        result = run_mk(['--dingus'], tmp_path)

        assert result.returncode == 1
        assert result.locators == []
        assert result.stderr.startswith('Error: invalid mk configuration')
        assert 'colour' in result.stderr

    @pytest.mark.parametrize('flag', ['--version', '--help'])
    def test_invalid_config_ignored_for_informational_flags(
        self,
        run_mk: MkCommand,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        flag: str,
    ) -> None:
        config_file = tmp_path / 'mk.yaml'
        config_file.write_text('bogus_key: 1\n')
        monkeypatch.setenv('MK_CONFIG', str(config_file))

        result = run_mk([flag], tmp_path)

        assert result.returncode == 0
        assert result.stderr == ''
        if flag == '--version':
            assert result.stdout.startswith('mk version ')
        else:
            assert result.stdout == USAGE

    def test_unknown_home_directory(self, run_mk: MkCommand, tmp_path: Path) -> None:
        result = run_mk(['~nosuchuser_zz/notes.md'], tmp_path)

        assert result.returncode == 1
        assert result.locators == []
        assert result.stderr.splitlines() == [
            f'Error: File does not exist: {tmp_path.resolve() / "~nosuchuser_zz" / "notes.md"}',
        ]

    def test_file_name_too_long(self, run_mk: MkCommand, tmp_path: Path) -> None:
        result = run_mk(['a' * 5000 + '.md'], tmp_path)

        assert result.returncode == 1
        assert result.locators == []
        assert result.stderr.startswith('Error: File does not exist:')

    def test_keyboard_interrupt(self, tmp_path: Path, mocker: MockerFixture, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        dispatcher = mocker.Mock()
        dispatcher.run.side_effect = KeyboardInterrupt
        mocker.patch.object(main_module, 'build_dispatcher', return_value=dispatcher)

        assert main_module.run(['-']) == 130


class TestBuildDispatcher:
    """Tests for build_dispatcher."""

    def test_uses_config(self, mocker: MockerFixture) -> None:
        make_opener = mocker.patch.object(main_module, 'make_opener')
        config = MkConfig(scheme='x-marked', pasteboard='board', opener=['xdg-open'])

        dispatcher = main_module.build_dispatcher(config)

        make_opener.assert_called_once_with(['xdg-open'])
        assert dispatcher.scheme == 'x-marked'
        assert dispatcher.pasteboard == 'board'
        assert dispatcher.clipboard is main_module.write_named_clipboard


class TestMain:
    """Tests for the console script entry point."""

    def test_main_exits_with_run_code(self, mocker: MockerFixture) -> None:
        mocker.patch.object(main_module, 'run', return_value=1)

        with pytest.raises(SystemExit) as exc_info:
            main_module.main()

        assert exc_info.value.code == 1
