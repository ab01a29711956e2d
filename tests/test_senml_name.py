"""
Tests for SenML name validation.
"""

import pytest

from senml_name import validate_name


class TestValidNames:
    """Names that match the SenML name grammar."""

    @pytest.mark.parametrize('name', [
        'Sensor1',
        'sensor-name',
        '123Sensor',
        'sensor_123',
        'sensor.name/1',
        'urn:dev:ow:10e2073a01080063',
        '2001:db8::2/temperature',
        'a',
        '0',
        'abcd-',
    ])
    def test_valid(self, name):
        assert validate_name(name)


class TestInvalidNames:
    """Names rejected by the SenML name grammar."""

    @pytest.mark.parametrize('name', [
        '',             # Empty string
        '-sensor',      # Starts with a non-alphanumeric character
        '.name',
        '_name',
        ':name',
        '/name',
        'sensor name',  # Contains a space
        'sensor@name',  # Contains an invalid character
        'sensor+1',
        'センサー',      # Non-Latin characters
        'café',    # Latin letter outside ASCII
        '١٢',  # Arabic-Indic digits
        'name\n',       # Trailing newline
        '\tname',
    ])
    def test_invalid(self, name):
        assert not validate_name(name)

    def test_non_string(self):
        """Non-string input is never a valid name."""
        assert not validate_name(None)
        assert not validate_name(42)
