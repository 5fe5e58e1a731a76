from typing import Dict

from .errors import InvalidPriorityError

# Severities (low 3 bits)
LOG_EMERG = 0
LOG_ALERT = 1
LOG_CRIT = 2
LOG_ERR = 3
LOG_WARNING = 4
LOG_NOTICE = 5
LOG_INFO = 6
LOG_DEBUG = 7

# Facilities (pre-shifted so LOG_USER | LOG_INFO composes)
LOG_KERN = 0 << 3
LOG_USER = 1 << 3
LOG_MAIL = 2 << 3
LOG_DAEMON = 3 << 3
LOG_AUTH = 4 << 3
LOG_SYSLOG = 5 << 3
LOG_LPR = 6 << 3
LOG_NEWS = 7 << 3
LOG_UUCP = 8 << 3
LOG_CRON = 9 << 3
LOG_AUTHPRIV = 10 << 3
LOG_FTP = 11 << 3
LOG_NTP = 12 << 3
LOG_SECURITY = 13 << 3
LOG_CONSOLE = 14 << 3
LOG_SOLARIS_CRON = 15 << 3
LOG_LOCAL0 = 16 << 3
LOG_LOCAL1 = 17 << 3
LOG_LOCAL2 = 18 << 3
LOG_LOCAL3 = 19 << 3
LOG_LOCAL4 = 20 << 3
LOG_LOCAL5 = 21 << 3
LOG_LOCAL6 = 22 << 3
LOG_LOCAL7 = 23 << 3

FACILITY_MASK = 0xF8
SEVERITY_MASK = 0x07

MAX_PRIORITY = LOG_LOCAL7 | LOG_DEBUG

SEVERITY_NAMES: Dict[int, str] = {
    LOG_EMERG: 'emergency',
    LOG_ALERT: 'alert',
    LOG_CRIT: 'critical',
    LOG_ERR: 'error',
    LOG_WARNING: 'warning',
    LOG_NOTICE: 'notice',
    LOG_INFO: 'info',
    LOG_DEBUG: 'debug'
}

FACILITY_NAMES: Dict[str, int] = {
    'kern': LOG_KERN, 'user': LOG_USER, 'mail': LOG_MAIL, 'daemon': LOG_DAEMON,
    'auth': LOG_AUTH, 'syslog': LOG_SYSLOG, 'lpr': LOG_LPR, 'news': LOG_NEWS,
    'uucp': LOG_UUCP, 'cron': LOG_CRON, 'authpriv': LOG_AUTHPRIV, 'ftp': LOG_FTP,
    'ntp': LOG_NTP, 'security': LOG_SECURITY, 'console': LOG_CONSOLE,
    'solaris-cron': LOG_SOLARIS_CRON,
    'local0': LOG_LOCAL0, 'local1': LOG_LOCAL1, 'local2': LOG_LOCAL2, 'local3': LOG_LOCAL3,
    'local4': LOG_LOCAL4, 'local5': LOG_LOCAL5, 'local6': LOG_LOCAL6, 'local7': LOG_LOCAL7
}


def make_priority(facility: int, severity: int) -> int:
    """
    Pack a facility code (0-23) and a severity (0-7) into a priority value.
    """
    if not 0 <= facility <= 23:
        raise InvalidPriorityError(f"facility {facility} out of range 0-23")
    if not 0 <= severity <= 7:
        raise InvalidPriorityError(f"severity {severity} out of range 0-7")
    return facility * 8 + severity


def facility_of(priority: int) -> int:
    """Facility code (0-23) encoded in a priority"""
    return (priority & FACILITY_MASK) >> 3


def severity_of(priority: int) -> int:
    """Severity (0-7) encoded in a priority"""
    return priority & SEVERITY_MASK


def validate_priority(priority: int) -> int:
    if priority < 0 or priority > MAX_PRIORITY:
        raise InvalidPriorityError(f"invalid priority {priority}")
    return priority


def parse_facility(value: str) -> int:
    """
    Resolve a facility given by name ('local3') or numeric code ('19').
    Returns the pre-shifted facility; empty input means daemon.
    """
    if value == '':
        return LOG_DAEMON

    if value in FACILITY_NAMES:
        return FACILITY_NAMES[value]

    try:
        code = int(value)
    except ValueError:
        raise InvalidPriorityError(f"invalid syslog facility: {value!r}") from None

    if 0 <= code <= 23:
        return code << 3

    raise InvalidPriorityError(f"invalid syslog facility: {value!r}")
