"""
Centralized logging configuration for the wikitide package.
"""

import logging
import sys
from rich.logging import RichHandler
from rich.console import Console

def setup_logging(
    level: str = "INFO",
    use_rich: bool = True,
) -> None:
    """
    Set up consistent logging for the library and the CLI.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        use_rich: Whether to use Rich's colored output (recommended for interactive use)
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if use_rich:
        console = Console(file=sys.stderr)  # keep stdout for command output

        handler = RichHandler(
            console=console,
            level=numeric_level,
            show_time=True,
            show_level=True,
            show_path=False,
            rich_tracebacks=True,
            markup=False,
            log_time_format="[%H:%M:%S]"
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(
            "[%(asctime)s] %(levelname)-5s %(name)s: %(message)s",
            datefmt="%H:%M:%S"
        ))

    handler.setLevel(numeric_level)
    root_logger.addHandler(handler)

    # The HTTP client logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.debug(f"Logging configured: level={level}, rich={use_rich}")
