import io
import os
import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

import pytest
from pydantic import BaseModel
from pytest_mock import MockerFixture

import mk.main as main_module
from mk.logging import configure_logging


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the user's config and verbosity out of every test."""
    home = tmp_path / 'home'
    home.mkdir()
    monkeypatch.setenv('HOME', str(home))
    monkeypatch.delenv('MK_CONFIG', raising=False)
    monkeypatch.delenv('MK_VERBOSE', raising=False)
    configure_logging(verbose=False)


@dataclass
class Recorder:
    """Capturing stand-ins for the opener and the named clipboard."""

    locators: list[str] = field(default_factory=list)
    clipboard: list[tuple[str, str]] = field(default_factory=list)

    def open(self, locator: str) -> None:
        self.locators.append(locator)

    def write_clipboard(self, name: str, text: str) -> None:
        self.clipboard.append((name, text))


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


class Result(BaseModel):
    returncode: int
    stdout: str
    stderr: str
    locators: list[str]
    clipboard: list[tuple[str, str]]


@dataclass
class RunCommandContext:
    args: list[str]
    cwd: Path
    stdin: bytes | None
    interactive: bool


MkCommand = Callable[..., Result]


@pytest.fixture
def run_mk(
    capsys: pytest.CaptureFixture,
    mocker: MockerFixture,
    recorder: Recorder,
) -> MkCommand:
    """Drive ``mk.main.run`` with fake system capabilities."""

    def _run(
        args: list[str],
        cwd: Path,
        *,
        stdin: bytes | None = None,
        interactive: bool = True,
    ) -> Result:
        ctx = RunCommandContext(args=args, cwd=cwd, stdin=stdin, interactive=interactive)
        old_cwd = Path.cwd()
        try:
            os.chdir(ctx.cwd)
            mocker.patch.object(main_module, 'make_opener', return_value=recorder.open)
            mocker.patch.object(main_module, 'write_named_clipboard', recorder.write_clipboard)
            mocker.patch.object(main_module, 'stdin_is_interactive', return_value=ctx.interactive)
            mocker.patch.object(sys, 'stdin', io.TextIOWrapper(io.BytesIO(ctx.stdin or b'')))
            exit_code = main_module.run(ctx.args)
            captured = capsys.readouterr()
            return Result(
                returncode=exit_code,
                stdout=captured.out,
                stderr=captured.err,
                locators=recorder.locators,
                clipboard=recorder.clipboard,
            )
        finally:
            os.chdir(old_cwd)

    return _run
