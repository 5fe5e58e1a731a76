"""Pytest configuration and shared fixtures for test suite"""

import os
import shutil
import socket
import subprocess
import tempfile
from typing import Generator, Tuple

import pytest

from tests.receivers import StreamReceiver, UDPReceiver, UnixDatagramReceiver


def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests requiring network")


@pytest.fixture
def short_tmp_dir() -> Generator[str, None, None]:
    """Temporary directory with a path short enough for AF_UNIX sockets"""
    with tempfile.TemporaryDirectory(prefix='slt') as tmpdir:
        yield tmpdir


@pytest.fixture
def udp_receiver() -> Generator[UDPReceiver, None, None]:
    receiver = UDPReceiver()
    receiver.start()
    yield receiver
    receiver.stop()


@pytest.fixture
def tcp_receiver() -> Generator[StreamReceiver, None, None]:
    """Newline-delimited TCP receiver"""
    receiver = StreamReceiver()
    receiver.start()
    yield receiver
    receiver.stop()


@pytest.fixture
def framed_tcp_receiver() -> Generator[StreamReceiver, None, None]:
    """Octet-counting TCP receiver"""
    receiver = StreamReceiver(framed=True)
    receiver.start()
    yield receiver
    receiver.stop()


@pytest.fixture
def local_daemon(short_tmp_dir: str) -> Generator[UnixDatagramReceiver, None, None]:
    receiver = UnixDatagramReceiver(os.path.join(short_tmp_dir, 'log'))
    receiver.start()
    yield receiver
    receiver.stop()


def _generate_self_signed_cert(cert_path: str, key_path: str) -> None:
    """Generate a self-signed certificate valid for localhost and 127.0.0.1"""
    cmd = [
        'openssl', 'req', '-x509', '-newkey', 'rsa:2048',
        '-keyout', key_path, '-out', cert_path,
        '-days', '1', '-nodes',
        '-subj', '/CN=localhost',
        '-addext', 'subjectAltName=DNS:localhost,IP:127.0.0.1'
    ]

    result = subprocess.run(cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE)
    if result.returncode != 0:
        raise RuntimeError(f"Could not generate self-signed certificate: {result.stderr.decode()}")


@pytest.fixture(scope='session')
def tls_cert_files() -> Generator[Tuple[str, str], None, None]:
    """(cert, key) paths for a throwaway self-signed certificate"""
    if shutil.which('openssl') is None:
        pytest.skip("openssl CLI not available")

    with tempfile.TemporaryDirectory() as tmpdir:
        cert_file = os.path.join(tmpdir, 'cert.pem')
        key_file = os.path.join(tmpdir, 'key.pem')
        _generate_self_signed_cert(cert_file, key_file)
        yield cert_file, key_file


@pytest.fixture
def tls_receiver(tls_cert_files: Tuple[str, str]) -> Generator[StreamReceiver, None, None]:
    """Octet-counting TLS receiver using the self-signed certificate"""
    receiver = StreamReceiver(framed=True, tls_files=tls_cert_files)
    receiver.start()
    yield receiver
    receiver.stop()


@pytest.fixture
def unused_tcp_address() -> str:
    """127.0.0.1:port with nothing listening on it"""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(('127.0.0.1', 0))
    port = sock.getsockname()[1]
    sock.close()
    return f'127.0.0.1:{port}'
