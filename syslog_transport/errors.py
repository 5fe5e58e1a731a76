class SyslogError(Exception):
    """Base class for all syslog transport errors"""


class InvalidPriorityError(SyslogError, ValueError):
    """Priority outside the 0..191 range, or facility/severity out of range"""


class TLSConfigError(SyslogError, ValueError):
    """Certificate or key material could not be loaded"""


class UnknownNetworkError(SyslogError, ValueError):
    """Transport name not understood by the basic dialer"""


class SyslogConfigError(SyslogError, ValueError):
    """Invalid value in the environment-driven configuration"""


class DeliveryUnavailableError(SyslogError, ConnectionError):
    """No transport could be established to deliver messages"""
