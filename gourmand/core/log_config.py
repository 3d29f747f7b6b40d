import logging
import sys

LOGGER_NAME = "gourmand"
_HANDLER_NAME = "gourmand-stderr"

_RECORD_ATTRS = set(logging.LogRecord("", 0, "", 0, "", None, None).__dict__) | {
    "message",
    "asctime",
}


class EventFormatter(logging.Formatter):
    """Append the ``extra=`` fields of a record as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = [
            f"{key}={value}"
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        ]
        if fields:
            line = f"{line} {' '.join(fields)}"
        return line


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Route the package's log records to stderr.

    Only the ``gourmand`` logger is configured so boto3 and botocore keep
    their own defaults. Repeated calls replace the handler instead of
    stacking a second one.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    for handler in list(logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(EventFormatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    return logger
