"""
Open functions returning a connected SyslogWriter.

The priority is validated here, once, and a writer is only returned when the
first connection succeeded.
"""

import socket
import ssl
import sys
from typing import Optional, Union

from .dialer import DialFunc
from .priority import validate_priority
from .syslog_writer import SyslogWriter
from .tls_config import context_from_cert, context_from_cert_path


def new(priority: int, tag: str = '') -> SyslogWriter:
    """Connect to the local syslog daemon"""
    return dial('', '', priority, tag)


def dial(network: str, raddr: str, priority: int, tag: str = '') -> SyslogWriter:
    """
    Connect to a syslog receiver.

    Args:
        network: '' for the local daemon, or 'tcp', 'udp', 'tcp+tls', ...
        raddr: Receiver address, 'host:port'
        priority: Default facility | severity
        tag: Program tag; defaults to sys.argv[0]
    """
    return _open(network, raddr, priority, tag)


def dial_with_tls_config(network: str, raddr: str, priority: int, tag: str,
                         tls_context: ssl.SSLContext) -> SyslogWriter:
    return _open(network, raddr, priority, tag, tls_context=tls_context)


def dial_with_tls_cert_path(network: str, raddr: str, priority: int, tag: str,
                            cert_path: str) -> SyslogWriter:
    """TLS connection trusting only the PEM certificate stored at cert_path"""
    # Priority errors are reported before any certificate is read
    validate_priority(priority)
    return dial_with_tls_config(network, raddr, priority, tag,
                                context_from_cert_path(cert_path))


def dial_with_tls_cert(network: str, raddr: str, priority: int, tag: str,
                       server_cert: Union[bytes, str]) -> SyslogWriter:
    """TLS connection trusting only the given PEM certificate"""
    validate_priority(priority)
    return dial_with_tls_config(network, raddr, priority, tag,
                                context_from_cert(server_cert))


def dial_with_custom_dialer(network: str, raddr: str, priority: int, tag: str,
                            custom_dial: DialFunc) -> SyslogWriter:
    """
    Connect through custom_dial(network, raddr), which must return a
    socket-like object. network is only passed through to custom_dial.
    """
    return _open(network, raddr, priority, tag, custom_dial=custom_dial)


def _open(network: str,
          raddr: str,
          priority: int,
          tag: str,
          tls_context: Optional[ssl.SSLContext] = None,
          custom_dial: Optional[DialFunc] = None) -> SyslogWriter:
    validate_priority(priority)

    if tag == '':
        tag = sys.argv[0]

    writer = SyslogWriter(
        priority=priority,
        tag=tag,
        hostname=socket.gethostname(),
        network=network,
        raddr=raddr,
        tls_context=tls_context,
        custom_dial=custom_dial
    )
    writer.connect()
    return writer
