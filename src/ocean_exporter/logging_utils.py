import sys

from loguru import logger

from ocean_exporter import settings


def setup_logging(level: str = settings.LOG_LEVEL, json: bool = settings.LOG_JSON) -> None:
    """Replace loguru's default sink with a single stderr sink.

    ``json=True`` emits one serialized record per line, which keeps the
    ``kind`` context bound by the sync engine as a structured field.
    """
    logger.remove()
    if json:
        logger.add(sys.stderr, level=level.upper(), serialize=True, backtrace=False, diagnose=False)
    else:
        logger.add(
            sys.stderr,
            level=level.upper(),
            format=(
                "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{line}</cyan> | {extra} <level>{message}</level>"
            ),
            backtrace=False,
            diagnose=False,
        )
