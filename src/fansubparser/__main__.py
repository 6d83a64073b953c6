"""
fansubparser Package Main Entry Point

Runs the CLI when the package is executed with ``python -m fansubparser``
and backs the ``fansubparser`` console script.
"""

from __future__ import annotations

import logging
import sys

from fansubparser.cli.common.error_handler import handle_cli_error
from fansubparser.cli.typer_app import app
from fansubparser.shared.constants import CLIDefaults

logger = logging.getLogger(__name__)


def main() -> None:
    """Run the Typer application with top-level error handling."""
    try:
        app()
    except KeyboardInterrupt:
        logger.info("Command interrupted by user")
        sys.exit(CLIDefaults.EXIT_INTERRUPTED)
    except SystemExit:
        # Re-raise SystemExit to preserve exit codes
        raise
    except Exception as e:  # noqa: BLE001
        exit_code = handle_cli_error(e, "fansubparser-main")
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
