import logging
import ssl
from typing import Optional, Union

from .errors import TLSConfigError

logger = logging.getLogger(__name__)


def context_from_cert(server_cert: Union[bytes, str]) -> ssl.SSLContext:
    """
    Client context that trusts only the given PEM certificate(s).
    Hostname checking stays on.
    """
    if isinstance(server_cert, bytes):
        server_cert = server_cert.decode('ascii', errors='replace')

    context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    try:
        context.load_verify_locations(cadata=server_cert)
    except (ssl.SSLError, ValueError) as e:
        raise TLSConfigError(f"Invalid server certificate: {e}") from e

    return context


def context_from_cert_path(cert_path: str) -> ssl.SSLContext:
    """Same as context_from_cert, reading the PEM data from cert_path"""
    try:
        with open(cert_path, 'rb') as f:
            server_cert = f.read()
    except OSError as e:
        raise TLSConfigError(f"Could not read certificate {cert_path}: {e}") from e

    logger.debug(f"Loaded server certificate from {cert_path}")
    return context_from_cert(server_cert)


def client_context(ca_file: Optional[str] = None,
                   cert_file: Optional[str] = None,
                   key_file: Optional[str] = None,
                   skip_verify: bool = False) -> ssl.SSLContext:
    """
    Build a client context from trust and credential material.

    Args:
        ca_file: PEM bundle of trusted CAs; system defaults when omitted
        cert_file: Client certificate for mutual TLS
        key_file: Private key for cert_file (may be inside cert_file)
        skip_verify: Accept any server certificate and hostname
    """
    try:
        context = ssl.create_default_context(ssl.Purpose.SERVER_AUTH, cafile=ca_file)
        if cert_file:
            context.load_cert_chain(cert_file, key_file)
    except (OSError, ValueError) as e:
        raise TLSConfigError(f"Could not load TLS material: {e}") from e

    if skip_verify:
        logger.warning("TLS certificate verification disabled")
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE

    return context
