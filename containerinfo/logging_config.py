import logging
import os
from logging.handlers import RotatingFileHandler
from .config import settings


def configure_logging() -> None:
    root = logging.getLogger()
    level = logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        level = logging.INFO
    root.setLevel(level)

    formatter = logging.Formatter(
        fmt="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Console handler
    ch = logging.StreamHandler()
    ch.setLevel(level)
    ch.setFormatter(formatter)
    root.addHandler(ch)

    if not settings.log_to_file:
        return

    # Rotating file handler
    os.makedirs(settings.logs_dir, exist_ok=True)
    log_path = os.path.join(settings.logs_dir, "app.log")
    fh = RotatingFileHandler(log_path, maxBytes=2_000_000, backupCount=5)
    fh.setLevel(level)
    fh.setFormatter(formatter)
    root.addHandler(fh)
