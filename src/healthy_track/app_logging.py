"""Logging configuration helpers."""

import logging

_RECORD_ATTRIBUTES = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


class ContextFormatter(logging.Formatter):
    """Formatter that appends ``extra=`` context such as user and record ids."""

    def format(self, record: logging.LogRecord) -> str:
        """Format the record, then add any extra fields as key=value pairs."""
        formatted = super().format(record)
        context = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRIBUTES and not key.startswith("_")
        }
        if not context:
            return formatted
        pairs = " ".join(f"{key}={value}" for key, value in sorted(context.items()))
        return f"{formatted} [{pairs}]"


def configure_logging() -> None:
    """Configure application logging with a single stream handler."""
    logger = logging.getLogger("healthy_track")
    logger.setLevel(logging.INFO)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(ContextFormatter("%(levelname)s: %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
