"""
Environment-driven configuration for a single syslog destination.

    SYSLOG_ADDRESS          proto://host[:port] (port defaults to 514),
                            unix:///path or unixgram:///path; empty means
                            the local daemon
    SYSLOG_FACILITY         facility name or code (default: daemon)
    SYSLOG_TAG              program tag (default: sys.argv[0])
    SYSLOG_HOSTNAME         hostname override
    SYSLOG_FORMAT           default | unix | rfc3164 | rfc5424
    SYSLOG_TIME_FORMAT      rfc3339 | rfc3339micro; micro implies rfc5424
    SYSLOG_DISABLE_FRAMER   true to skip octet counting on stream transports
    SYSLOG_TLS_CA_CERT      CA bundle for tcp+tls
    SYSLOG_TLS_CERT         client certificate for tcp+tls
    SYSLOG_TLS_KEY          client key for tcp+tls
    SYSLOG_TLS_SKIP_VERIFY  true to accept any server certificate
"""

import logging
import os
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Tuple
from urllib.parse import urlsplit

from .dial import dial, dial_with_tls_config
from .dialer import TLS_SUFFIX
from .errors import InvalidPriorityError, SyslogConfigError
from .formatter import (Formatter, default_formatter, rfc3164_formatter,
                        rfc5424_formatter, rfc5424_micro_formatter,
                        unix_formatter)
from .framer import rfc5425_message_length_framer
from .priority import LOG_DAEMON, LOG_INFO, parse_facility
from .syslog_writer import SyslogWriter
from .tls_config import client_context

logger = logging.getLogger(__name__)

DEFAULT_PORT = 514

FORMATTERS: Dict[str, Formatter] = {
    'default': default_formatter,
    'unix': unix_formatter,
    'rfc3164': rfc3164_formatter,
    'rfc5424': rfc5424_formatter
}

TIME_FORMATS = ('rfc3339', 'rfc3339micro')

INET_SCHEMES = ('tcp', 'tcp4', 'tcp6', 'udp', 'udp4', 'udp6')
UNIX_SCHEMES = ('unix', 'unixgram')


def parse_address(address: str) -> Tuple[str, str]:
    """
    Split 'proto://host:port' into (network, raddr).
    Returns ('', '') for an empty address (local daemon).
    """
    if address == '':
        return '', ''

    scheme, sep, rest = address.partition('://')
    if not sep or not scheme:
        raise SyslogConfigError(f"address should be in form proto://address, got {address}")

    if scheme in UNIX_SCHEMES:
        if not os.path.exists(rest):
            raise SyslogConfigError(f"socket path {rest} does not exist")
        return scheme, rest

    base = scheme[:-len(TLS_SUFFIX)] if scheme.endswith(TLS_SUFFIX) else scheme
    if base not in INET_SCHEMES:
        raise SyslogConfigError(f"unsupported syslog transport {scheme!r}")

    host = urlsplit(address).netloc
    if not host:
        raise SyslogConfigError(f"missing host in address {address}")

    if host.startswith('['):
        has_port = ']:' in host
    else:
        has_port = ':' in host
    if not has_port:
        host = f"{host}:{DEFAULT_PORT}"

    return scheme, host


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ('', '0', 'false', 'no'):
        return False
    if lowered in ('1', 'true', 'yes'):
        return True
    raise SyslogConfigError(f"{name} should be true or false, got {value!r}")


@dataclass
class SyslogConfig:
    """Settings for one syslog destination"""
    network: str = ''
    raddr: str = ''
    facility: int = LOG_DAEMON
    tag: str = ''
    hostname: str = ''
    format: str = ''
    time_format: str = ''
    disable_framer: bool = False
    tls_ca_cert: Optional[str] = None
    tls_cert: Optional[str] = None
    tls_key: Optional[str] = None
    tls_skip_verify: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'SyslogConfig':
        env = os.environ if environ is None else environ

        network, raddr = parse_address(env.get('SYSLOG_ADDRESS', ''))

        try:
            facility = parse_facility(env.get('SYSLOG_FACILITY', ''))
        except InvalidPriorityError as e:
            raise SyslogConfigError(str(e)) from e

        fmt = env.get('SYSLOG_FORMAT', '')
        if fmt and fmt not in FORMATTERS:
            raise SyslogConfigError(f"unknown syslog format {fmt!r}")

        time_format = env.get('SYSLOG_TIME_FORMAT', '')
        if time_format and time_format not in TIME_FORMATS:
            raise SyslogConfigError(f"unknown syslog time format {time_format!r}")
        if time_format == 'rfc3339micro' and fmt not in ('', 'rfc5424'):
            raise SyslogConfigError(f"time format {time_format} needs the rfc5424 format, got {fmt!r}")

        return cls(
            network=network,
            raddr=raddr,
            facility=facility,
            tag=env.get('SYSLOG_TAG', ''),
            hostname=env.get('SYSLOG_HOSTNAME', ''),
            format=fmt,
            time_format=time_format,
            disable_framer=_parse_bool('SYSLOG_DISABLE_FRAMER', env.get('SYSLOG_DISABLE_FRAMER', '')),
            tls_ca_cert=env.get('SYSLOG_TLS_CA_CERT') or None,
            tls_cert=env.get('SYSLOG_TLS_CERT') or None,
            tls_key=env.get('SYSLOG_TLS_KEY') or None,
            tls_skip_verify=_parse_bool('SYSLOG_TLS_SKIP_VERIFY', env.get('SYSLOG_TLS_SKIP_VERIFY', ''))
        )

    @property
    def is_stream(self) -> bool:
        return self.network.startswith('tcp') or self.network == 'unix'

    def open_writer(self) -> SyslogWriter:
        """Dial the configured destination and apply formatting options"""
        priority = self.facility | LOG_INFO

        if self.network.endswith(TLS_SUFFIX):
            context = client_context(
                ca_file=self.tls_ca_cert,
                cert_file=self.tls_cert,
                key_file=self.tls_key,
                skip_verify=self.tls_skip_verify
            )
            writer = dial_with_tls_config(self.network, self.raddr, priority, self.tag, context)
        else:
            writer = dial(self.network, self.raddr, priority, self.tag)

        if self.hostname:
            writer.set_hostname(self.hostname)

        if self.time_format == 'rfc3339micro':
            writer.set_formatter(rfc5424_micro_formatter)
        elif self.format:
            writer.set_formatter(FORMATTERS[self.format])

        if self.is_stream and not self.disable_framer:
            writer.set_framer(rfc5425_message_length_framer)

        logger.info(f"Syslog destination ready: {self.network or 'local'} {self.raddr}")
        return writer
