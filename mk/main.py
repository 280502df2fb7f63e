"""Main entry point for the mk CLI."""

import sys
from collections.abc import Sequence

from mk import __version__
from mk.config import MkConfig, load_config_from_env
from mk.dispatch import Dispatcher
from mk.errors import MkError
from mk.logging import configure_logging, get_logger
from mk.parsing import parse_arguments
from mk.system import make_opener, stdin_is_interactive, write_named_clipboard

logger = get_logger(__name__)


def build_dispatcher(config: MkConfig) -> Dispatcher:
    """Create a dispatcher wired to the real macOS capabilities."""
    return Dispatcher(
        make_opener(config.opener),
        write_named_clipboard,
        scheme=config.scheme,
        pasteboard=config.pasteboard,
        version=__version__,
        is_interactive=stdin_is_interactive,
    )


def run(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, dispatch and return the process exit code."""
    configure_logging(verbose=False)

    try:
        intent = parse_arguments(sys.argv[1:] if argv is None else argv)
        # version and help never depend on the config file
        config = MkConfig() if intent.show_version or intent.show_help else load_config_from_env()
        configure_logging(verbose=config.verbose or intent.verbose)

        logger.debug(
            'starting_mk',
            version=__version__,
            scheme=config.scheme,
            _verbose_config=config.model_dump(),
            _verbose_intent=intent.model_dump(mode='json', exclude_defaults=True),
        )
        return build_dispatcher(config).run(intent)
    except MkError as e:
        logger.debug('mk_failed', error=str(e), error_type=type(e).__name__)
        sys.stderr.write(f'Error: {e}\n')
        return 1
    except KeyboardInterrupt:
        sys.stderr.write('\n')
        return 130


def main() -> None:
    """Main entry point for the mk CLI."""
    sys.exit(run())


if __name__ == '__main__':
    main()
