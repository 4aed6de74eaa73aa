import logging
import sys

_THIRD_PARTY_LOGGERS = ("httpx", "httpcore")


def configure_logging(*, verbose: bool = False, quiet: bool = False) -> None:
    """Send log records to stderr so decision tables on stdout stay clean."""
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)-8s %(name)s — %(message)s", datefmt="%H:%M:%S"))
    root.addHandler(handler)

    # Request lines from the HTTP stack only show up under -v.
    for name in _THIRD_PARTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.NOTSET if verbose else logging.WARNING)
