import logging
import sys


def configure_logging(*, verbose: bool = False) -> None:
    """Send log records, and numpy/scipy runtime warnings, to stderr.

    Runtime warnings are routed through the ``py.warnings`` logger so they
    share the handler and format of the analysis log.
    """
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.DEBUG if verbose else logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    root.addHandler(handler)

    logging.captureWarnings(True)
