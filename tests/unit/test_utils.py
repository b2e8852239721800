from decimal import Decimal
from unittest.mock import Mock

import pytest
from boto3.dynamodb.types import Binary

from dynamodb_lookup.utils import (
    build_projection_expression,
    format_value,
    parse_projection,
    render_item,
    timed,
)


class TestBuildProjectionExpression:
    """Test projection expression building."""

    def test_no_fields(self):
        """Test None and empty lists project nothing."""
        assert build_projection_expression(None) == (None, None)
        assert build_projection_expression([]) == (None, None)

    def test_fields_use_placeholders_in_order(self):
        """Test every field gets a numbered placeholder in the given order."""
        expression, names = build_projection_expression(['default', 'bold', 'Name'])

        assert expression == '#f0, #f1, #f2'
        assert names == {'#f0': 'default', '#f1': 'bold', '#f2': 'Name'}


class TestParseProjection:
    """Test parsing of comma-separated projection strings."""

    def test_none(self):
        assert parse_projection(None) is None

    def test_whitespace_stripped(self):
        """Test names are trimmed and keep their order."""
        assert parse_projection('default, bold') == ['default', 'bold']

    def test_empty_segments_dropped(self):
        assert parse_projection(' ,bold,, italic ,') == ['bold', 'italic']

    @pytest.mark.parametrize('raw', ['', '  ', ' , , '])
    def test_nothing_named(self, raw):
        """Test strings naming no attribute mean no projection."""
        assert parse_projection(raw) is None


class TestTimed:
    """Test the timing decorator."""

    def test_reports_elapsed_and_returns_result(self):
        """Test the wrapped call's result and duration are both delivered."""
        def lookup(table, name):
            return (table, name)

        on_elapsed = Mock()
        wrapped = timed(lookup, on_elapsed=on_elapsed)

        assert wrapped('HelloTable', 'World') == ('HelloTable', 'World')
        on_elapsed.assert_called_once()
        name, elapsed_us = on_elapsed.call_args.args
        assert name.endswith('lookup')
        assert isinstance(elapsed_us, int)
        assert elapsed_us >= 0

    def test_reports_elapsed_on_error(self):
        """Test the duration is reported when the call raises."""
        def lookup():
            raise RuntimeError("store down")

        on_elapsed = Mock()
        wrapped = timed(lookup, on_elapsed=on_elapsed)

        with pytest.raises(RuntimeError, match="store down"):
            wrapped()
        on_elapsed.assert_called_once()

    def test_logs_at_debug(self, caplog):
        """Test the duration is logged without a callback."""
        def lookup():
            return None

        with caplog.at_level('DEBUG', logger='dynamodb_lookup.utils'):
            timed(lookup)()

        assert 'lookup took' in caplog.text
        assert '[µs]' in caplog.text

    def test_preserves_metadata(self):
        def lookup():
            """Look something up."""

        assert timed(lookup).__doc__ == "Look something up."
        assert timed(lookup).__name__ == "lookup"


class TestFormatValue:
    """Test rendering of deserialized attribute values."""

    @pytest.mark.parametrize('value, expected', [
        ('hi', 'hi'),
        (Decimal('42'), '42'),
        (Decimal('1.50'), '1.50'),
        (True, 'true'),
        (None, 'null'),
        (Binary(b'\x00\x01'), 'AAE='),
        (b'\x00\x01', 'AAE='),
        ([Decimal('1'), 'a'], '[1, "a"]'),
        ({'Lang': 'en', 'Score': Decimal('1.5')}, '{"Lang": "en", "Score": 1.5}'),
        ({'y', 'x'}, '["x", "y"]'),
    ])
    def test_values(self, value, expected):
        assert format_value(value) == expected

    def test_render_item_keeps_order(self):
        """Test items render as name: value lines in item order."""
        lines = render_item({'Name': 'World', 'Greeting': 'hi', 'Visits': Decimal('3')})

        assert lines == ['Name: World', 'Greeting: hi', 'Visits: 3']
