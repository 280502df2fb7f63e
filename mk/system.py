"""Operating-system capabilities used by the dispatcher.

Everything here talks to macOS. The dispatcher only sees the callables, so
tests replace them with capturing stubs.
"""

import subprocess
import sys
from collections.abc import Callable, Sequence

from mk.errors import ClipboardError, DispatchError
from mk.logging import get_logger

logger = get_logger(__name__)

Opener = Callable[[str], None]
ClipboardWriter = Callable[[str, str], None]

DEFAULT_OPENER = ('open',)


def make_opener(command: Sequence[str] = DEFAULT_OPENER) -> Opener:
    """Return a function that hands a locator to the registered URL handler."""
    argv = list(command)

    def open_locator(locator: str) -> None:
        logger.debug('running_opener', command=[*argv, locator])
        try:
            subprocess.run(  # noqa: S603 - argv comes from config, locator is one argument
                [*argv, locator],
                check=True,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError as exc:
            msg = f'Opener not found: {argv[0]}'
            raise DispatchError(msg) from exc
        except subprocess.CalledProcessError as exc:
            logger.debug('opener_failed', returncode=exc.returncode, stderr=exc.stderr)
            msg = f'Could not open URL: {locator}'
            raise DispatchError(msg) from exc

    return open_locator


def write_named_clipboard(name: str, text: str) -> None:
    """Replace the contents of a named pasteboard with text."""
    try:
        from AppKit import NSPasteboard, NSPasteboardTypeString  # noqa: PLC0415 - macOS only
    except ImportError as exc:
        msg = 'Named clipboard requires macOS with pyobjc-framework-Cocoa installed'
        raise ClipboardError(msg) from exc

    pasteboard = NSPasteboard.pasteboardWithName_(name)
    pasteboard.clearContents()
    if not pasteboard.setString_forType_(text, NSPasteboardTypeString):
        msg = f'Could not write to clipboard {name}'
        raise ClipboardError(msg)
    logger.debug('clipboard_written', pasteboard=name, length=len(text))


def stdin_is_interactive() -> bool:
    """Return True when standard input is attached to a terminal."""
    return sys.stdin is not None and sys.stdin.isatty()
