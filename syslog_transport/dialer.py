import logging
import socket
import ssl
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, List, Optional, Tuple

from .connection import LocalConnection, NetworkConnection, ServerConnection
from .errors import DeliveryUnavailableError, SyslogConfigError, UnknownNetworkError

if TYPE_CHECKING:
    from .syslog_writer import SyslogWriter

logger = logging.getLogger(__name__)

TLS_SUFFIX = '+tls'

# Tried in order until one accepts a connection
LOCAL_SOCKET_CANDIDATES: List[Tuple[int, str]] = [
    (socket.SOCK_DGRAM, '/dev/log'),
    (socket.SOCK_DGRAM, '/var/run/syslog'),
    (socket.SOCK_DGRAM, '/var/run/log'),
    (socket.SOCK_STREAM, '/dev/log'),
    (socket.SOCK_STREAM, '/var/run/syslog'),
    (socket.SOCK_STREAM, '/var/run/log'),
]

# (network, address) -> socket-like object with sendall() and close()
DialFunc = Callable[[str, str], object]


@dataclass
class Dialer:
    """A named connection procedure; call() returns (connection, hostname)"""
    name: str
    call: Callable[[], Tuple[ServerConnection, str]]


def get_dialer(writer: 'SyslogWriter') -> Dialer:
    """
    Pick the dial procedure for a writer.
    Precedence: custom dial function, local daemon (empty network),
    TLS (network ending in '+tls'), then plain sockets.
    """
    if writer.custom_dial is not None:
        return Dialer('custom_dialer', lambda: custom_dialer(writer))

    if writer.network == '':
        return Dialer('unix_dialer', lambda: unix_dialer(writer))

    if writer.network.endswith(TLS_SUFFIX):
        return Dialer('tls_dialer', lambda: tls_dialer(writer))

    return Dialer('basic_dialer', lambda: basic_dialer(writer))


def split_host_port(address: str) -> Tuple[str, int]:
    """Split 'host:port' or '[v6addr]:port'"""
    if address.startswith('['):
        host, _, rest = address[1:].partition(']')
        if not rest.startswith(':'):
            raise SyslogConfigError(f"missing port in address {address!r}")
        port_str = rest[1:]
    else:
        host, sep, port_str = address.rpartition(':')
        if not sep:
            raise SyslogConfigError(f"missing port in address {address!r}")

    try:
        port = int(port_str)
    except ValueError:
        raise SyslogConfigError(f"invalid port in address {address!r}") from None

    return host, port


def _connect_inet(address: str, family: int, sock_type: int) -> socket.socket:
    host, port = split_host_port(address)

    last_error: Optional[OSError] = None
    for af, kind, proto, _, sockaddr in socket.getaddrinfo(host, port, family, sock_type):
        sock = socket.socket(af, kind, proto)
        try:
            sock.connect(sockaddr)
            return sock
        except OSError as e:
            last_error = e
            sock.close()

    if last_error is not None:
        raise last_error
    raise DeliveryUnavailableError(f"no usable address for {address}")


def _connect_unix(path: str, sock_type: int) -> socket.socket:
    sock = socket.socket(socket.AF_UNIX, sock_type)
    try:
        sock.connect(path)
    except OSError:
        sock.close()
        raise
    return sock


def dial_socket(network: str, address: str) -> socket.socket:
    """
    Open a connected socket for a transport name such as 'tcp', 'udp6'
    or 'unixgram'.
    """
    if network == 'unix':
        return _connect_unix(address, socket.SOCK_STREAM)
    if network == 'unixgram':
        return _connect_unix(address, socket.SOCK_DGRAM)

    family = socket.AF_UNSPEC
    if network.endswith('4'):
        family = socket.AF_INET
    elif network.endswith('6'):
        family = socket.AF_INET6

    base = network.rstrip('46')
    if base == 'tcp':
        return _connect_inet(address, family, socket.SOCK_STREAM)
    if base == 'udp':
        return _connect_inet(address, family, socket.SOCK_DGRAM)

    raise UnknownNetworkError(f"unknown network {network!r}")


def _resolve_hostname(writer: 'SyslogWriter', conn: ServerConnection) -> str:
    if writer.hostname:
        return writer.hostname
    return conn.local_address() or 'localhost'


def unix_dialer(writer: 'SyslogWriter') -> Tuple[ServerConnection, str]:
    """Connect to the first local daemon socket that accepts us"""
    candidates = writer.local_socket_candidates
    if candidates is None:
        candidates = LOCAL_SOCKET_CANDIDATES

    for sock_type, path in candidates:
        try:
            sock = _connect_unix(path, sock_type)
        except OSError as e:
            logger.debug(f"Local syslog socket {path} unavailable: {e}")
            continue

        logger.info(f"Connected to local syslog daemon at {path}")
        return LocalConnection(sock), writer.hostname or 'localhost'

    raise DeliveryUnavailableError("Unix syslog delivery error")


def tls_dialer(writer: 'SyslogWriter') -> Tuple[ServerConnection, str]:
    network = writer.network[:-len(TLS_SUFFIX)]
    host, _ = split_host_port(writer.raddr)

    raw = dial_socket(network, writer.raddr)
    context = writer.tls_context or ssl.create_default_context()
    try:
        sock = context.wrap_socket(raw, server_hostname=host)
    except (OSError, ValueError):
        raw.close()
        raise

    logger.info(f"TLS connection established to {writer.raddr}")
    conn = NetworkConnection(sock)
    return conn, _resolve_hostname(writer, conn)


def basic_dialer(writer: 'SyslogWriter') -> Tuple[ServerConnection, str]:
    sock = dial_socket(writer.network, writer.raddr)

    logger.info(f"Connected to {writer.raddr} over {writer.network}")
    conn = NetworkConnection(sock)
    return conn, _resolve_hostname(writer, conn)


def custom_dialer(writer: 'SyslogWriter') -> Tuple[ServerConnection, str]:
    """Use the caller's dial function whatever the network name says"""
    handle = writer.custom_dial(writer.network, writer.raddr)
    if handle is None:
        raise DeliveryUnavailableError(
            f"custom dial returned no connection for {writer.network}:{writer.raddr}")

    logger.info(f"Custom dial to {writer.raddr} succeeded")
    conn = NetworkConnection(handle)
    return conn, _resolve_hostname(writer, conn)
