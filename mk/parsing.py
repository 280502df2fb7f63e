"""Command-line token scanning.

The option table is matched by exact string comparison in a single
left-to-right pass. Flags with an optional value only consume the next token
when it does not start with ``-``; flags with a required value consume the
next token whatever it looks like, and are dropped when nothing follows.
"""

import sys
from collections.abc import Sequence
from typing import Any

from mk.logging import get_logger
from mk.models import Intent

logger = get_logger(__name__)

# Flags whose value may be omitted. Without a value they map to ''.
OPTIONAL_VALUE_FLAGS = {
    '--refresh': 'refresh_target',
    '--pref': 'pref_page',
    '--stylestealer': 'stylestealer_url',
    '--steal': 'stylestealer_url',
    '--importurl': 'importurl_url',
    '--markdownify': 'importurl_url',
}

REQUIRED_VALUE_FLAGS = {
    '--preview': 'preview_text',
    '--extract': 'extract_url',
    '--style': 'style_name',
    '--add-style': 'add_style_file',
}

SWITCHES = {
    '-h': 'show_help',
    '--help': 'show_help',
    '-v': 'show_version',
    '--version': 'show_version',
    '-s': 'stream',
    '--stream': 'stream',
    '--dingus': 'dingus',
    '--paste': 'paste',
    '--raise': 'raise_window',
    '--verbose': 'verbose',
    '-': 'use_stdin',
}


def is_value_token(token: str) -> bool:
    """Return True when a token can be taken as an option value."""
    return not token.startswith('-')


def clean_token(token: str) -> str:
    """Replace lone surrogates left by undecodable argv bytes."""
    return token.encode('utf-8', 'surrogatepass').decode('utf-8', 'replace')


def split_defaults_pair(pair: str) -> tuple[str, str] | None:
    """Split ``KEY=VALUE`` on the first ``=``; None when malformed."""
    key, sep, value = pair.partition('=')
    if not sep or not key:
        return None
    return key, value


class _Scanner:
    """Cursor over the token list."""

    def __init__(self, tokens: Sequence[str]) -> None:
        self.tokens = [clean_token(token) for token in tokens]
        self.index = 0

    def peek(self) -> str | None:
        if self.index + 1 < len(self.tokens):
            return self.tokens[self.index + 1]
        return None

    def take(self) -> str:
        self.index += 1
        return self.tokens[self.index]

    def take_optional(self) -> str | None:
        """Consume the next token only if it does not start with a dash."""
        upcoming = self.peek()
        if upcoming is not None and is_value_token(upcoming):
            return self.take()
        return None


def parse_arguments(tokens: Sequence[str] | None = None) -> Intent:
    """Scan command-line tokens into an Intent.

    Never raises. Malformed ``--defaults`` pairs are reported on stderr, one
    line each, and recorded on the Intent's ``warnings``.
    """
    if tokens is None:
        tokens = sys.argv[1:]

    fields: dict[str, Any] = {}
    defaults: dict[str, str] = {}
    warnings: list[str] = []
    scanner = _Scanner(tokens)

    while scanner.index < len(scanner.tokens):
        token = scanner.tokens[scanner.index]

        if token in SWITCHES:
            fields[SWITCHES[token]] = True
        elif token in OPTIONAL_VALUE_FLAGS:
            value = scanner.take_optional()
            fields[OPTIONAL_VALUE_FLAGS[token]] = value if value is not None else ''
        elif token in REQUIRED_VALUE_FLAGS:
            if scanner.peek() is not None:
                fields[REQUIRED_VALUE_FLAGS[token]] = scanner.take()
            else:
                logger.debug('option_value_missing', option=token)
        elif token == '--defaults':
            while (pair := scanner.take_optional()) is not None:
                split = split_defaults_pair(pair)
                if split is None:
                    warning = f"Warning: Invalid defaults format '{pair}', expected KEY=VALUE"
                    sys.stderr.write(f'{warning}\n')
                    warnings.append(warning)
                    continue
                key, value = split
                defaults[key] = value
        elif token == '--dojs':
            if scanner.peek() is not None:
                fields['js_script'] = scanner.take()
                fields['js_target'] = scanner.take_optional()
            else:
                logger.debug('option_value_missing', option=token)
        elif is_value_token(token):
            fields.setdefault('file_path', token)
        else:
            logger.debug('unknown_option_ignored', option=token)

        scanner.index += 1

    return Intent(**fields, defaults=defaults, warnings=tuple(warnings))
