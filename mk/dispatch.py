"""Turning an Intent into exactly one request for Marked."""

import os
import sys
from collections.abc import Callable
from pathlib import Path
from typing import BinaryIO

from mk.config import DEFAULT_PASTEBOARD
from mk.errors import InputDecodeError, TargetNotFoundError
from mk.locator import DEFAULT_SCHEME, build_locator, build_request
from mk.logging import get_logger
from mk.models import Intent, Request
from mk.system import ClipboardWriter, Opener
from mk.usage import USAGE

logger = get_logger(__name__)


def resolve_path(path: str, cwd: Path | None = None) -> Path:
    """Expand ``~``, anchor relative paths at cwd and normalise lexically.

    Symlinks are left alone.
    """
    expanded = Path(path)
    try:
        expanded = expanded.expanduser()
    except RuntimeError:
        # unknown ~user, left as written
        logger.debug('home_not_expanded', path=path)
    if not expanded.is_absolute():
        expanded = (cwd or Path.cwd()) / expanded
    return Path(os.path.normpath(expanded))


def target_exists(path: Path) -> bool:
    """Return True when path exists; unusable paths count as missing."""
    try:
        return path.exists()
    except OSError:
        logger.debug('existence_check_failed', path=str(path))
        return False


def style_display_name(stylesheet: Path) -> str:
    """Name a custom style after its file, without directory or extension."""
    return stylesheet.stem


def optional_param(key: str, value: str | None) -> dict[str, str]:
    """Return ``{key: value}`` for a non-empty value, else nothing."""
    return {key: value} if value else {}


class Dispatcher:
    """Resolve the single action an Intent asks for and send it.

    The opener and clipboard writer are the only ways this class reaches the
    outside world, apart from reading stdin and checking that files exist.
    """

    def __init__(
        self,
        opener: Opener,
        clipboard: ClipboardWriter,
        *,
        scheme: str = DEFAULT_SCHEME,
        pasteboard: str = DEFAULT_PASTEBOARD,
        version: str = '',
        stdin: BinaryIO | None = None,
        is_interactive: Callable[[], bool] = lambda: False,
    ) -> None:
        self.opener = opener
        self.clipboard = clipboard
        self.scheme = scheme
        self.pasteboard = pasteboard
        self.version = version
        self.stdin = stdin
        self.is_interactive = is_interactive

    def send(self, command: str, params: dict[str, str] | None = None) -> Request:
        """Build a request, render it and hand it to the opener."""
        request = build_request(command, params)
        locator = build_locator(request, self.scheme)
        logger.debug(
            'dispatching_request',
            command=request.command,
            _verbose_locator=locator,
        )
        self.opener(locator)
        return request

    def show_version(self) -> None:
        sys.stdout.write(f'mk version {self.version}\n')

    def show_usage(self) -> None:
        sys.stdout.write(USAGE)

    def read_stdin(self) -> str:
        """Read standard input to end-of-stream as UTF-8 text."""
        stream = self.stdin if self.stdin is not None else sys.stdin.buffer
        try:
            data = stream.read()
        except OSError as exc:
            msg = 'Could not read from standard input'
            raise InputDecodeError(msg) from exc
        try:
            return data.decode('utf-8')
        except UnicodeDecodeError as exc:
            msg = 'Could not read from standard input'
            raise InputDecodeError(msg) from exc

    def stream_stdin(self) -> Request:
        """Put stdin on the named clipboard, then open the streaming preview."""
        text = self.read_stdin()
        logger.debug('stdin_read', length=len(text))
        self.clipboard(self.pasteboard, text)
        return self.send('stream')

    def add_style(self, stylesheet: str) -> Request:
        resolved = resolve_path(stylesheet)
        logger.debug('resolved_path', path=str(resolved))
        if not target_exists(resolved):
            msg = f'CSS file does not exist: {resolved}'
            raise TargetNotFoundError(msg)
        return self.send(
            'addstyle',
            {'file': str(resolved), 'name': style_display_name(resolved)},
        )

    def open_file(self, file_path: str, *, raise_window: bool = False) -> Request:
        resolved = resolve_path(file_path)
        logger.debug('resolved_path', path=str(resolved))
        if not target_exists(resolved):
            msg = f'File does not exist: {resolved}'
            raise TargetNotFoundError(msg)
        params = {'file': str(resolved)}
        if raise_window:
            params['raise'] = 'true'
        return self.send('open', params)

    def run(self, intent: Intent) -> int:  # noqa: C901, PLR0911, PLR0912 - flat precedence table
        """Perform the first matching action and return the exit code.

        Fatal conditions raise MkError subclasses instead of returning.
        """
        if intent.show_version:
            self.show_version()
            return 0

        if intent.show_help:
            self.show_usage()
            return 0

        if intent.refresh_target is not None:
            self.send('refresh', optional_param('file', intent.refresh_target))
            return 0

        if intent.pref_page is not None:
            self.send('pref', optional_param('page', intent.pref_page))
            return 0

        if intent.dingus:
            self.send('dingus')
            return 0

        if intent.paste:
            self.send('paste')
            return 0

        if intent.preview_text is not None:
            self.send('preview', {'text': intent.preview_text})
            return 0

        if intent.extract_url is not None:
            self.send('extract', {'url': intent.extract_url})
            return 0

        if intent.stylestealer_url is not None:
            self.send('stylestealer', optional_param('url', intent.stylestealer_url))
            return 0

        if intent.importurl_url is not None:
            self.send('importurl', optional_param('url', intent.importurl_url))
            return 0

        if intent.add_style_file is not None:
            self.add_style(intent.add_style_file)
            return 0

        if intent.defaults:
            self.send('defaults', dict(intent.defaults))
            return 0

        if intent.js_script is not None:
            params = {'js': intent.js_script}
            if intent.js_target is not None:
                params['file'] = intent.js_target
            self.send('do', params)
            return 0

        if intent.style_name is not None:
            logger.debug('style_option_has_no_request', style=intent.style_name)

        if intent.file_path is not None:
            self.open_file(intent.file_path, raise_window=intent.raise_window)
        elif intent.stream and not intent.use_stdin:
            self.send('stream')
        elif intent.use_stdin:
            self.stream_stdin()
        elif self.is_interactive():
            self.show_usage()
        else:
            self.stream_stdin()
        return 0
