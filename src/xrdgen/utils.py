import logging

from rich.console import Console
from rich.logging import RichHandler

from xrdgen import config

log = logging.getLogger("xrdgen")


def setup_logging(level=None):
    """Route log records through rich on stderr.

    ``level`` defaults to the ``LOG_LEVEL`` environment variable. Markup is
    only rendered for records logged with ``extra={"markup": True}``, since
    schema error messages contain square brackets.
    """
    level = (level or config.log_level()).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(name)s - %(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(console=Console(stderr=True), rich_tracebacks=True)
        ],
        force=True,
    )
    return log
