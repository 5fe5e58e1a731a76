import logging
from datetime import datetime
from typing import Optional

from .dial import new
from .priority import (FACILITY_MASK, LOG_CRIT, LOG_DEBUG, LOG_ERR, LOG_INFO,
                       LOG_WARNING)
from .syslog_writer import SyslogWriter

logger = logging.getLogger(__name__)

# Logger names under this prefix belong to the writer itself
PACKAGE_LOGGER = __name__.partition('.')[0]


class SyslogHandler(logging.Handler):
    """
    logging.Handler that forwards records through a SyslogWriter.
    The writer's facility is kept; the severity comes from the record level.
    """

    def __init__(self, writer: SyslogWriter, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.writer: SyslogWriter = writer

    @staticmethod
    def map_severity(levelno: int) -> int:
        """Syslog severity for a logging level, rounding down between levels"""
        if levelno >= logging.CRITICAL:
            return LOG_CRIT
        if levelno >= logging.ERROR:
            return LOG_ERR
        if levelno >= logging.WARNING:
            return LOG_WARNING
        if levelno >= logging.INFO:
            return LOG_INFO
        return LOG_DEBUG

    def filter(self, record: logging.LogRecord):
        """
        Drop records logged by this package, so a failing writer never
        handles its own failure logs.
        """
        if record.name == PACKAGE_LOGGER or record.name.startswith(PACKAGE_LOGGER + '.'):
            return False
        return super().filter(record)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            priority = (self.writer.priority & FACILITY_MASK) | self.map_severity(record.levelno)
            timestamp = datetime.fromtimestamp(record.created).astimezone()
            self.writer.write_with_timestamp_and_priority(timestamp, priority, message)
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        try:
            self.writer.close()
        except OSError as e:
            logger.error(f"Error closing syslog writer: {e}")
        finally:
            super().close()


def new_logger(priority: int,
               tag: str = '',
               name: str = 'syslog',
               fmt: Optional[str] = None) -> logging.Logger:
    """
    Logger whose records go to the local syslog daemon.

    Args:
        priority: Facility used for every record (severity comes from the level)
        tag: Program tag; defaults to sys.argv[0]
        name: Name passed to logging.getLogger
        fmt: Optional logging format string for the message body
    """
    handler = SyslogHandler(new(priority, tag))
    if fmt is not None:
        handler.setFormatter(logging.Formatter(fmt))

    log = logging.getLogger(name)
    log.addHandler(handler)
    return log
