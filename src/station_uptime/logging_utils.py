import logging
import sys


def setup_logging(debug: bool = False) -> None:
    """Configure logging to stderr so stdout stays free for results."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
