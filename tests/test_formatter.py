"""Unit tests for the four syslog message formatters"""

import os
from datetime import datetime, timedelta, timezone

import pytest

from syslog_transport.formatter import (APP_NAME_MAX_LENGTH, default_formatter,
                                        format_rfc3339, format_stamp,
                                        rfc3164_formatter, rfc5424_formatter,
                                        rfc5424_micro_formatter,
                                        truncate_start, unix_formatter)
from syslog_transport.priority import LOG_ERR

TIMESTAMP = datetime(2025, 11, 17, 10, 30, 45, 123456, tzinfo=timezone.utc)
PID = os.getpid()


@pytest.mark.unit
class TestTimestamps:
    """Tests for RFC 3339 and BSD stamp rendering"""

    def test_rfc3339_utc_uses_z(self):
        assert format_rfc3339(TIMESTAMP) == '2025-11-17T10:30:45Z'

    def test_rfc3339_with_offset(self):
        tz = timezone(timedelta(hours=2))
        assert format_rfc3339(datetime(2025, 1, 2, 3, 4, 5, tzinfo=tz)) == '2025-01-02T03:04:05+02:00'

    def test_rfc3339_negative_offset(self):
        tz = timezone(-timedelta(hours=5, minutes=30))
        assert format_rfc3339(datetime(2025, 1, 2, 3, 4, 5, tzinfo=tz)) == '2025-01-02T03:04:05-05:30'

    def test_rfc3339_naive_is_treated_as_local(self):
        """Test that naive datetimes get the local offset instead of failing"""
        naive = datetime(2025, 6, 1, 12, 0, 0)
        assert format_rfc3339(naive) == format_rfc3339(naive.astimezone())

    def test_stamp_pads_single_digit_day_with_space(self):
        assert format_stamp(datetime(2025, 1, 5, 9, 8, 7)) == 'Jan  5 09:08:07'

    def test_rfc3339_microseconds_with_offset(self):
        tz = timezone(timedelta(hours=2))
        ts = datetime(2025, 1, 2, 3, 4, 5, 7, tzinfo=tz)
        assert format_rfc3339(ts, microseconds=True) == '2025-01-02T03:04:05.000007+02:00'

    def test_stamp_two_digit_day(self):
        assert format_stamp(TIMESTAMP) == 'Nov 17 10:30:45'


@pytest.mark.unit
class TestFormatters:
    """Tests that each formatter matches its template byte for byte"""

    def test_default_formatter(self):
        out = default_formatter(TIMESTAMP, LOG_ERR, 'hostname', 'tag', b'content')
        assert out == f'<3> 2025-11-17T10:30:45Z hostname tag[{PID}]: content'.encode()

    def test_unix_formatter_omits_hostname(self):
        out = unix_formatter(TIMESTAMP, LOG_ERR, 'hostname', 'tag', b'content')
        assert out == f'<3>Nov 17 10:30:45 tag[{PID}]: content'.encode()
        assert b'hostname' not in out

    def test_rfc3164_formatter(self):
        out = rfc3164_formatter(TIMESTAMP, LOG_ERR, 'hostname', 'tag', b'content')
        assert out == f'<3>Nov 17 10:30:45 hostname tag[{PID}]: content'.encode()

    def test_rfc5424_formatter(self, monkeypatch):
        monkeypatch.setattr('sys.argv', ['/usr/bin/app'])
        out = rfc5424_formatter(TIMESTAMP, LOG_ERR, 'hostname', 'tag', b'content')
        assert out == f'<3>1 2025-11-17T10:30:45Z hostname /usr/bin/app {PID} tag - content'.encode()

    def test_rfc5424_truncates_long_app_name_from_start(self, monkeypatch):
        """Test that a 60-character argv[0] keeps its last 48 characters"""
        argv0 = '/usr/local/' + 'b' * 49
        assert len(argv0) == 60
        monkeypatch.setattr('sys.argv', [argv0])

        out = rfc5424_formatter(TIMESTAMP, LOG_ERR, 'hostname', 'tag', b'content')
        app_name = out.split(b' ')[3].decode()

        assert len(app_name) == APP_NAME_MAX_LENGTH
        assert app_name == argv0[-48:]

    def test_rfc5424_micro_formatter(self, monkeypatch):
        monkeypatch.setattr('sys.argv', ['/usr/bin/app'])
        out = rfc5424_micro_formatter(TIMESTAMP, LOG_ERR, 'hostname', 'tag', b'content')
        assert out == f'<3>1 2025-11-17T10:30:45.123456Z hostname /usr/bin/app {PID} tag - content'.encode()

    def test_formatters_do_not_mutate_content(self):
        content = bytearray(b'payload\n')
        for formatter in (default_formatter, unix_formatter, rfc3164_formatter, rfc5424_formatter):
            formatter(TIMESTAMP, LOG_ERR, 'h', 't', content)
            assert content == bytearray(b'payload\n')

    def test_non_ascii_content_passes_through(self):
        content = 'Unicode test: 你好世界 🚀'.encode('utf-8')
        out = default_formatter(TIMESTAMP, LOG_ERR, 'h', 't', content)
        assert out.endswith(content)


@pytest.mark.unit
class TestTruncateStart:

    def test_longer_string_keeps_tail(self):
        assert truncate_start('abcde', 3) == 'cde'

    def test_exact_length_unchanged(self):
        assert truncate_start('abcde', 5) == 'abcde'

    def test_shorter_string_unchanged(self):
        assert truncate_start('ab', 5) == 'ab'
