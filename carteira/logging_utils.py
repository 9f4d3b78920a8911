"""Console logging for the CLI."""

import logging

LOG_FORMAT = "%(levelname)-7s %(name)s: %(message)s"


def configure_logging(level: str = "INFO", *, verbose: bool = False) -> int:
    """Set the root level from ``CARTEIRA_LOG_LEVEL``, or DEBUG with ``--verbose``.

    A stderr handler is added only when the root logger has none yet, so
    repeated calls (and test runners with their own handlers) just change the
    level. Unknown names fall back to INFO. Returns the level applied.
    """
    if verbose:
        resolved = logging.DEBUG
    else:
        resolved = logging.getLevelNamesMapping().get(level.strip().upper(), logging.INFO)

    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(resolved)

    # requests/urllib3 connection chatter stays out of --verbose output
    logging.getLogger("urllib3").setLevel(max(resolved, logging.INFO))
    return resolved
