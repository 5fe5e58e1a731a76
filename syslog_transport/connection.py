import socket
import ssl
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, List, Optional

from .formatter import Formatter, default_formatter, unix_formatter
from .framer import Framer, default_framer


class ServerConnection(ABC):
    """A live transport to a syslog receiver"""

    def __init__(self, sock: Any) -> None:
        self.sock = sock

    @abstractmethod
    def write(self,
              framer: Optional[Framer],
              formatter: Optional[Formatter],
              timestamp: datetime,
              priority: int,
              hostname: str,
              tag: str,
              content: bytes) -> None:
        """
        Format, frame and send one record.
        Raises OSError (or whatever the transport raises) on failure.
        """

    def close(self) -> None:
        """Close the underlying transport"""
        self.sock.close()

    def local_address(self) -> str:
        """
        Host part of the transport's local address, or '' when the
        transport has none (unix sockets, handles without getsockname).
        """
        try:
            addr = self.sock.getsockname()
        except (AttributeError, OSError):
            return ''

        if isinstance(addr, tuple):
            return str(addr[0])
        if isinstance(addr, bytes):
            return addr.decode('utf-8', errors='replace')
        return str(addr) if addr else ''

    def _is_datagram(self) -> bool:
        return getattr(self.sock, 'type', None) == socket.SOCK_DGRAM


class LocalConnection(ServerConnection):
    """
    Connection to the local syslog daemon over a Unix domain socket.
    Defaults to the unix formatter, which leaves out the hostname.
    """

    def write(self,
              framer: Optional[Framer],
              formatter: Optional[Formatter],
              timestamp: datetime,
              priority: int,
              hostname: str,
              tag: str,
              content: bytes) -> None:
        if framer is None:
            framer = default_framer
        if formatter is None:
            formatter = unix_formatter

        chunks = framer(formatter(timestamp, priority, hostname, tag, content))
        message = chunks[0] if len(chunks) == 1 else b''.join(chunks)

        if self._is_datagram():
            self.sock.send(message)
        else:
            self.sock.sendall(message)


class NetworkConnection(ServerConnection):
    """
    Connection to a remote receiver over TCP, UDP, TLS or a custom transport.
    Defaults to the hybrid default formatter, which includes the hostname.
    """

    def write(self,
              framer: Optional[Framer],
              formatter: Optional[Formatter],
              timestamp: datetime,
              priority: int,
              hostname: str,
              tag: str,
              content: bytes) -> None:
        if framer is None:
            framer = default_framer
        if formatter is None:
            formatter = default_formatter

        chunks = framer(formatter(timestamp, priority, hostname, tag, content))

        if self._is_datagram():
            # One record is always one packet
            self.sock.send(b''.join(chunks))
        elif self._supports_gathered_write():
            self._send_gathered(chunks)
        else:
            message = chunks[0] if len(chunks) == 1 else b''.join(chunks)
            self.sock.sendall(message)

    def _supports_gathered_write(self) -> bool:
        # SSLSocket.sendmsg exists but raises NotImplementedError
        if isinstance(self.sock, ssl.SSLSocket):
            return False
        return (getattr(self.sock, 'type', None) == socket.SOCK_STREAM
                and hasattr(self.sock, 'sendmsg'))

    def _send_gathered(self, chunks: List[bytes]) -> None:
        """Single vectored send, finishing a short write with sendall"""
        total = sum(len(chunk) for chunk in chunks)
        sent = self.sock.sendmsg(chunks)
        if sent < total:
            self.sock.sendall(b''.join(chunks)[sent:])
