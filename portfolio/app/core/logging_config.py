"""
Logging setup. Application loggers live under the "portfolio." namespace; the
SDK loggers (boto3, openai, httpx) are held at WARNING unless we run at DEBUG.
"""
import logging
import sys

from portfolio.app.core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

_SDK_LOGGERS = ("botocore", "boto3", "s3transfer", "urllib3", "httpx", "httpcore", "openai")


def setup_logging(level: str | None = None) -> logging.Logger:
    """Configure stdout logging once and return the "portfolio" logger."""
    level_no = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    logging.basicConfig(
        level=level_no,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    sdk_level = logging.DEBUG if level_no <= logging.DEBUG else logging.WARNING
    for name in _SDK_LOGGERS:
        logging.getLogger(name).setLevel(sdk_level)
    return logging.getLogger("portfolio")


def get_logger(name: str) -> logging.Logger:
    """Logger for an application area, e.g. get_logger("services.storage")."""
    return logging.getLogger(f"portfolio.{name}")
