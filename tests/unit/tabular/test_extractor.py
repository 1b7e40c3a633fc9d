"""Tests for column extraction."""

from hostcheck.tabular import WHITESPACE, column, tokenize

ROUTE = """\
Destination     Gateway         Genmask         Flags Metric Ref    Use Iface
0.0.0.0         192.168.1.1     0.0.0.0         UG    100    0        0 eth0
192.168.1.0     0.0.0.0         255.255.255.0   U     100    0        0 eth0
"""


def test_column_with_header_skipped():
    table = tokenize(ROUTE, WHITESPACE)

    assert column(table, 7, skip_header=True) == ["eth0", "eth0"]
    assert "Iface" not in column(table, 7, skip_header=True)


def test_column_keeps_header_by_default():
    table = tokenize(ROUTE, WHITESPACE)

    assert column(table, 0) == ["Destination", "0.0.0.0", "192.168.1.0"]


def test_out_of_range_rows_contribute_nothing():
    """Short rows are skipped; long rows keep their order."""
    table = [["a", "b", "c"], ["d"], ["e", "f", "g"], []]

    assert column(table, 2) == ["c", "g"]


def test_index_beyond_every_row_is_empty():
    table = [["a"], ["b"]]

    assert column(table, 5) == []


def test_negative_index_does_not_wrap():
    table = [["a", "b"], ["c", "d"]]

    assert column(table, -1) == []


def test_duplicates_are_preserved():
    table = [["x"], ["y"], ["x"]]

    assert column(table, 0) == ["x", "y", "x"]


def test_skip_header_on_empty_table():
    assert column([], 0, skip_header=True) == []
