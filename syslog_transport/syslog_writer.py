import logging
import ssl
from datetime import datetime
from typing import Any, List, Optional, Tuple, Union

from .connection import ServerConnection
from .dialer import DialFunc, get_dialer
from .formatter import Formatter
from .framer import Framer
from .priority import (FACILITY_MASK, LOG_ALERT, LOG_CRIT, LOG_DEBUG, LOG_EMERG,
                       LOG_ERR, LOG_INFO, LOG_NOTICE, LOG_USER, LOG_WARNING,
                       SEVERITY_MASK)
from .rwlock import ReadWriteLock

logger = logging.getLogger(__name__)

Content = Union[bytes, bytearray, str]


class SyslogWriter:
    """Send log records to a syslog receiver, reconnecting once on failure"""

    def __init__(self,
                 priority: int = LOG_USER | LOG_INFO,
                 tag: str = '',
                 hostname: str = '',
                 network: str = '',
                 raddr: str = '',
                 tls_context: Optional[ssl.SSLContext] = None,
                 custom_dial: Optional[DialFunc] = None,
                 local_socket_candidates: Optional[List[Tuple[int, str]]] = None) -> None:
        """
        Initialize the writer. No connection is made until connect() or the
        first write.

        Args:
            priority: Default facility | severity for write()
            tag: Program tag put in every message
            hostname: Hostname override; resolved from the connection when empty
            network: '' (local daemon), 'tcp', 'udp', 'tcp+tls', 'unix', ...
            raddr: Receiver address as 'host:port' (or a socket path)
            tls_context: Context used by the TLS dialer
            custom_dial: Callable (network, raddr) -> socket-like; overrides network
            local_socket_candidates: (socket type, path) pairs probed for the
                                     local daemon, in order
        """
        self.priority: int = priority
        self.tag: str = tag
        self.hostname: str = hostname
        self.network: str = network
        self.raddr: str = raddr
        self.tls_context: Optional[ssl.SSLContext] = tls_context
        self.custom_dial: Optional[DialFunc] = custom_dial
        self.local_socket_candidates = local_socket_candidates

        self.formatter: Optional[Formatter] = None
        self.framer: Optional[Framer] = None

        # Guards self._conn only; never held across a network write
        self._lock: ReadWriteLock = ReadWriteLock()
        self._conn: Optional[ServerConnection] = None

    def _get_conn(self) -> Optional[ServerConnection]:
        with self._lock.read_locked():
            return self._conn

    def connect(self) -> ServerConnection:
        """
        Drop the current connection (close errors ignored) and dial a new one.
        Dial errors propagate and leave the writer without a connection.
        """
        with self._lock.write_locked():
            stale, self._conn = self._conn, None

        if stale is not None:
            self._close_quietly(stale)

        conn, hostname = get_dialer(self).call()

        with self._lock.write_locked():
            if self._conn is None:
                self._conn = conn
                self.hostname = hostname
                return conn
            installed = self._conn

        # Another thread installed a connection while we were dialing
        logger.debug("Discarding redundant connection")
        self._close_quietly(conn)
        return installed

    def _reconnect(self, failed: Optional[ServerConnection]) -> ServerConnection:
        current = self._get_conn()
        if current is not None and current is not failed:
            return current
        return self.connect()

    @staticmethod
    def _close_quietly(conn: ServerConnection) -> None:
        try:
            conn.close()
        except Exception as e:
            logger.debug(f"Ignoring error while closing connection: {e}")

    def set_formatter(self, formatter: Formatter) -> None:
        """Change the formatter for subsequent messages"""
        self.formatter = formatter

    def set_framer(self, framer: Framer) -> None:
        """Change the framer for subsequent messages"""
        self.framer = framer

    def set_hostname(self, hostname: str) -> None:
        self.hostname = hostname

    def write(self, content: Content) -> int:
        """Send content with the writer's default priority"""
        return self._write_and_retry(_now(), self.priority, content)

    def write_with_timestamp(self, timestamp: datetime, content: Content) -> int:
        return self._write_and_retry(timestamp, self.priority, content)

    def write_with_priority(self, priority: int, content: Content) -> int:
        """Send content with both facility and severity taken from priority"""
        return self._write_and_retry(_now(), priority, content)

    def write_with_timestamp_and_priority(self, timestamp: datetime, priority: int,
                                          content: Content) -> int:
        return self._write_and_retry(timestamp, priority, content)

    def emergency(self, message: Content) -> None:
        self._write_severity(LOG_EMERG, message)

    def alert(self, message: Content) -> None:
        self._write_severity(LOG_ALERT, message)

    def critical(self, message: Content) -> None:
        self._write_severity(LOG_CRIT, message)

    def error(self, message: Content) -> None:
        self._write_severity(LOG_ERR, message)

    def warning(self, message: Content) -> None:
        self._write_severity(LOG_WARNING, message)

    def notice(self, message: Content) -> None:
        self._write_severity(LOG_NOTICE, message)

    def info(self, message: Content) -> None:
        self._write_severity(LOG_INFO, message)

    def debug(self, message: Content) -> None:
        self._write_severity(LOG_DEBUG, message)

    def _write_severity(self, severity: int, message: Content) -> None:
        """
        Combine the writer's facility with severity. Facility bits passed in
        severity are discarded.
        """
        priority = (self.priority & FACILITY_MASK) | (severity & SEVERITY_MASK)
        self._write_and_retry(_now(), priority, message)

    def _write_and_retry(self, timestamp: datetime, priority: int, content: Content) -> int:
        """
        Write once on the current connection; on any failure (including no
        connection yet) reconnect once and write once more.
        """
        message = _terminate(content)

        conn = self._get_conn()
        if conn is not None:
            try:
                return self._write(conn, timestamp, priority, message)
            except Exception as e:
                logger.warning(f"Write to syslog failed, reconnecting: {e}")

        conn = self._reconnect(conn)
        try:
            return self._write(conn, timestamp, priority, message)
        except Exception as e:
            logger.error(f"Write to syslog failed after reconnect: {e}")
            raise

    def _write(self, conn: ServerConnection, timestamp: datetime, priority: int,
               message: bytes) -> int:
        conn.write(self.framer, self.formatter, timestamp, priority,
                   self.hostname, self.tag, message)
        return len(message)

    def close(self) -> None:
        """
        Close the connection if there is one. Safe to call repeatedly;
        errors from closing the transport propagate.
        """
        with self._lock.write_locked():
            conn, self._conn = self._conn, None

        if conn is None:
            logger.debug("SyslogWriter has no connection to close")
            return

        conn.close()

    def __enter__(self) -> 'SyslogWriter':
        """Context manager entry"""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> bool:
        """Context manager exit - closes the connection"""
        self.close()
        return False  # Don't suppress exceptions


def _now() -> datetime:
    return datetime.now().astimezone()


def _terminate(content: Content) -> bytes:
    """Return content as bytes ending in exactly one added-if-missing newline"""
    if isinstance(content, str):
        message = content.encode('utf-8')
    else:
        message = bytes(content)

    if not message.endswith(b'\n'):
        message += b'\n'
    return message
