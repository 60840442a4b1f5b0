import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Send application logs to stdout. A no-op once the root logger has handlers."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(log_level)

    logging.basicConfig(
        level=log_level,
        handlers=[console],
        format=LOG_FORMAT,
    )
