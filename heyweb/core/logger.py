import logging
import os

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_configured = False


def setup_logging(level: str | None = None) -> None:
    """Attach one stream handler to the ``heyweb`` logger tree."""
    global _configured
    resolved = (level or os.getenv("HEYWEB_LOG_LEVEL", "INFO")).strip().upper()
    root = logging.getLogger("heyweb")
    root.setLevel(getattr(logging, resolved, logging.INFO))
    if _configured:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    root.addHandler(handler)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    if not name.startswith("heyweb"):
        name = f"heyweb.{name}"
    return logging.getLogger(name)
