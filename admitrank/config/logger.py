# admitrank/config/logger.py
import logging
import sys

from admitrank.config.config import Settings, settings

LOG_FORMAT = "%(asctime)s %(levelname)-5s [admitrank] %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def resolve_log_level(cfg: Settings) -> int:
    """LOG_LEVEL wins when it names a real level; otherwise DEBUG in dev, INFO elsewhere."""
    level = logging.getLevelName(cfg.log_level.strip().upper()) if cfg.log_level else None
    if isinstance(level, int):
        return level
    return logging.DEBUG if cfg.env == "dev" else logging.INFO


def configure_logger(cfg: Settings) -> logging.Logger:
    """Sets up the package logger once; repeated calls only adjust the level."""
    log = logging.getLogger("admitrank")
    level = resolve_log_level(cfg)
    log.setLevel(level)

    if not log.handlers:
        stream = logging.StreamHandler(sys.stdout)
        stream.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
        log.addHandler(stream)
    for h in log.handlers:
        h.setLevel(level)
    return log


logger = configure_logger(settings)
