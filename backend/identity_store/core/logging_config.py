"""
Logging setup shared by the identity store modules.
"""
import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str | None = None) -> None:
    """
    Configure root logging for processes hosting the store.

    Args:
        level: Level name such as "DEBUG"; defaults to settings.log_level
    """
    if level is None:
        from identity_store.config import get_settings
        level = get_settings().log_level

    resolved = getattr(logging, level.upper(), None)
    if not isinstance(resolved, int):
        resolved = logging.INFO

    logging.basicConfig(
        level=resolved,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
    )
