"""Version lookup.

Strategies are tried in order and the first non-empty answer wins:
installed package metadata, then the Info.plist of a Marked.app bundle that
contains the running script, then a fixed fallback.
"""

import plistlib
import sys
from collections.abc import Callable, Iterable
from importlib import metadata
from pathlib import Path

DISTRIBUTION_NAME = 'mk-cli'
FALLBACK_VERSION = '3.0.0'
BUNDLE_MARKER = '/Contents/Resources/'

VersionStrategy = Callable[[], str | None]


def from_distribution() -> str | None:
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return None


def bundle_info_plist(executable: str) -> Path | None:
    """Locate the Info.plist of the .app bundle an executable lives in."""
    if BUNDLE_MARKER not in executable:
        return None
    bundle_path = executable.split(BUNDLE_MARKER, 1)[0]
    return Path(bundle_path) / 'Contents' / 'Info.plist'


def from_enclosing_bundle(executable: str | None = None) -> str | None:
    plist_path = bundle_info_plist(executable or sys.argv[0])
    if plist_path is None or not plist_path.is_file():
        return None
    try:
        with plist_path.open('rb') as fh:
            info = plistlib.load(fh)
    except (OSError, plistlib.InvalidFileException):
        return None
    version = info.get('CFBundleShortVersionString')
    return version if isinstance(version, str) else None


def from_fallback() -> str:
    return FALLBACK_VERSION


DEFAULT_STRATEGIES: tuple[VersionStrategy, ...] = (
    from_distribution,
    from_enclosing_bundle,
    from_fallback,
)


def resolve_version(strategies: Iterable[VersionStrategy] = DEFAULT_STRATEGIES) -> str:
    """Return the first non-empty version reported by the strategies."""
    for strategy in strategies:
        version = strategy()
        if version:
            return version
    return FALLBACK_VERSION
