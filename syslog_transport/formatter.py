"""
Formatters render the parts of a syslog record into wire bytes.

Each supported dialect is a plain function with the same signature, so
callers can plug in their own:

    formatter(timestamp, priority, hostname, tag, content) -> bytes
"""

import os
import sys
from datetime import datetime, timedelta
from typing import Callable, List

Formatter = Callable[[datetime, int, str, str, bytes], bytes]

# RFC 5424 limits APP-NAME to 48 printable characters
APP_NAME_MAX_LENGTH = 48

MONTHS: List[str] = [
    'Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
    'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec'
]


def truncate_start(s: str, max_len: int) -> str:
    """Keep the last max_len characters of s"""
    if len(s) > max_len:
        return s[len(s) - max_len:]
    return s


def format_rfc3339(timestamp: datetime, microseconds: bool = False) -> str:
    """
    RFC 3339 timestamp: 2025-11-17T10:30:45Z for UTC,
    2025-11-17T10:30:45+02:00 otherwise. Naive datetimes are local time.
    With microseconds the seconds carry six fractional digits.
    """
    if timestamp.tzinfo is None:
        timestamp = timestamp.astimezone()

    base = timestamp.strftime('%Y-%m-%dT%H:%M:%S')
    if microseconds:
        base += f".{timestamp.microsecond:06d}"
    offset = timestamp.utcoffset() or timedelta(0)
    if offset == timedelta(0):
        return base + 'Z'

    total_minutes = int(offset.total_seconds()) // 60
    sign = '+' if total_minutes >= 0 else '-'
    hours, minutes = divmod(abs(total_minutes), 60)
    return f"{base}{sign}{hours:02d}:{minutes:02d}"


def format_stamp(timestamp: datetime) -> str:
    """BSD stamp 'Jan  2 15:04:05': no year, no zone, day padded with a space"""
    return (f"{MONTHS[timestamp.month - 1]} {timestamp.day:2d} "
            f"{timestamp.hour:02d}:{timestamp.minute:02d}:{timestamp.second:02d}")


def default_formatter(timestamp: datetime, priority: int, hostname: str,
                      tag: str, content: bytes) -> bytes:
    """
    Mix of RFC 3164 and RFC 5424 that most receivers accept:
    <PRI> RFC3339 hostname tag[pid]: content
    """
    header = f"<{priority}> {format_rfc3339(timestamp)} {hostname} {tag}[{os.getpid()}]: "
    return header.encode('utf-8') + content


def unix_formatter(timestamp: datetime, priority: int, hostname: str,
                   tag: str, content: bytes) -> bytes:
    """Local daemon format; the hostname is left out"""
    header = f"<{priority}>{format_stamp(timestamp)} {tag}[{os.getpid()}]: "
    return header.encode('utf-8') + content


def rfc3164_formatter(timestamp: datetime, priority: int, hostname: str,
                      tag: str, content: bytes) -> bytes:
    header = f"<{priority}>{format_stamp(timestamp)} {hostname} {tag}[{os.getpid()}]: "
    return header.encode('utf-8') + content


def rfc5424_formatter(timestamp: datetime, priority: int, hostname: str,
                      tag: str, content: bytes) -> bytes:
    """
    RFC 5424 message with tag as MSGID and no structured data:
    <PRI>1 RFC3339 hostname app-name pid tag - content
    """
    return _rfc5424(timestamp, priority, hostname, tag, content, microseconds=False)


def rfc5424_micro_formatter(timestamp: datetime, priority: int, hostname: str,
                            tag: str, content: bytes) -> bytes:
    """rfc5424_formatter with microsecond timestamps"""
    return _rfc5424(timestamp, priority, hostname, tag, content, microseconds=True)


def _rfc5424(timestamp: datetime, priority: int, hostname: str, tag: str,
             content: bytes, microseconds: bool) -> bytes:
    app_name = truncate_start(sys.argv[0], APP_NAME_MAX_LENGTH)
    header = (f"<{priority}>1 {format_rfc3339(timestamp, microseconds)} {hostname} "
              f"{app_name} {os.getpid()} {tag} - ")
    return header.encode('utf-8') + content
