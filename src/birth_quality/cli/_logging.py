import logging
import sys

PACKAGE_LOGGER = "birth_quality"


def configure_logging(*, verbose: bool = False) -> None:
    """Route log records to stderr.

    Only the package's own loggers pass INFO through, and DEBUG only with
    ``verbose``. Everything else is held at WARNING.
    """
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.WARNING)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    root.addHandler(handler)

    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.INFO)
