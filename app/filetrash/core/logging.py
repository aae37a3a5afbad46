"""Logging setup for the filetrash CLI.

Library modules only create module-level loggers; handlers are installed
here, once, by the command-line entry point.
"""

import logging

from rich.logging import RichHandler

from filetrash.utils.formatting import err_console


def get_log_level(*, verbose: bool = False, quiet: bool = False) -> int:
    """Map CLI verbosity flags to a logging level.

    Verbose wins over quiet when both are given.
    """
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def configure_logging(*, verbose: bool = False, quiet: bool = False) -> None:
    """Install a Rich handler on the root logger.

    Existing handlers are replaced so repeated calls do not duplicate output.

    Args:
        verbose: Log debug messages, including every retry.
        quiet: Only log warnings and errors.
    """
    handler = RichHandler(
        console=err_console,
        show_path=verbose,
        rich_tracebacks=True,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(get_log_level(verbose=verbose, quiet=quiet))
