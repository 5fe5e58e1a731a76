"""
Syslog Transport Package

A Python client library for delivering log messages to syslog receivers
over the local daemon socket, UDP, TCP, TLS or a custom transport, with
pluggable message formats and framing and automatic reconnect on failure.
"""

from .config import SyslogConfig, parse_address
from .connection import LocalConnection, NetworkConnection, ServerConnection
from .dial import (dial, dial_with_custom_dialer, dial_with_tls_cert,
                   dial_with_tls_cert_path, dial_with_tls_config, new)
from .dialer import LOCAL_SOCKET_CANDIDATES, Dialer, get_dialer
from .errors import (DeliveryUnavailableError, InvalidPriorityError, SyslogConfigError,
                     SyslogError, TLSConfigError, UnknownNetworkError)
from .formatter import (Formatter, default_formatter, rfc3164_formatter,
                        rfc5424_formatter, rfc5424_micro_formatter, unix_formatter)
from .framer import Framer, default_framer, rfc5425_message_length_framer
from .handler import SyslogHandler, new_logger
from .priority import (FACILITY_MASK, LOG_ALERT, LOG_AUTH, LOG_AUTHPRIV, LOG_CRIT,
                       LOG_CRON, LOG_DAEMON, LOG_DEBUG, LOG_EMERG, LOG_ERR, LOG_FTP,
                       LOG_INFO, LOG_KERN, LOG_LOCAL0, LOG_LOCAL1, LOG_LOCAL2,
                       LOG_LOCAL3, LOG_LOCAL4, LOG_LOCAL5, LOG_LOCAL6, LOG_LOCAL7,
                       LOG_LPR, LOG_MAIL, LOG_NEWS, LOG_NOTICE, LOG_SYSLOG, LOG_USER,
                       LOG_UUCP, LOG_WARNING, SEVERITY_MASK, facility_of, make_priority,
                       parse_facility, severity_of, validate_priority)
from .syslog_writer import SyslogWriter

__all__ = [
    'DeliveryUnavailableError',
    'Dialer',
    'Formatter',
    'Framer',
    'InvalidPriorityError',
    'LOCAL_SOCKET_CANDIDATES',
    'LocalConnection',
    'NetworkConnection',
    'ServerConnection',
    'SyslogConfig',
    'SyslogConfigError',
    'SyslogError',
    'SyslogHandler',
    'SyslogWriter',
    'TLSConfigError',
    'UnknownNetworkError',
    'default_formatter',
    'default_framer',
    'dial',
    'dial_with_custom_dialer',
    'dial_with_tls_cert',
    'dial_with_tls_cert_path',
    'dial_with_tls_config',
    'get_dialer',
    'new',
    'new_logger',
    'parse_address',
    'rfc3164_formatter',
    'rfc5424_formatter',
    'rfc5424_micro_formatter',
    'rfc5425_message_length_framer',
    'unix_formatter',
    # priority
    'FACILITY_MASK', 'SEVERITY_MASK',
    'LOG_EMERG', 'LOG_ALERT', 'LOG_CRIT', 'LOG_ERR',
    'LOG_WARNING', 'LOG_NOTICE', 'LOG_INFO', 'LOG_DEBUG',
    'LOG_KERN', 'LOG_USER', 'LOG_MAIL', 'LOG_DAEMON', 'LOG_AUTH', 'LOG_SYSLOG',
    'LOG_LPR', 'LOG_NEWS', 'LOG_UUCP', 'LOG_CRON', 'LOG_AUTHPRIV', 'LOG_FTP',
    'LOG_LOCAL0', 'LOG_LOCAL1', 'LOG_LOCAL2', 'LOG_LOCAL3',
    'LOG_LOCAL4', 'LOG_LOCAL5', 'LOG_LOCAL6', 'LOG_LOCAL7',
    'facility_of', 'make_priority', 'parse_facility', 'severity_of', 'validate_priority',
]

__version__ = '1.0.0'
