import logging
import sys


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging with a single stderr handler.

    Safe to call more than once: pre-existing root handlers are replaced so
    reloads and test runs do not duplicate output.
    """
    root = logging.getLogger()
    root.setLevel(level)

    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(fmt)
    root.addHandler(handler)

    # request lines are noise next to our own task/auth events
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
