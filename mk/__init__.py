"""Command-line front-end for the Marked previewer."""

from mk.version import resolve_version

__version__ = resolve_version()
