#!filepath: tests/data/test_storage.py
import pytest

from stratlab.data import Bar, InMemoryStorage, SERIES_COLUMNS
from stratlab.utils.errors import UpstreamError


def _bar(ticker, ts, close=1.0):
    return Bar(ticker=ticker, timestamp=ts, open=close, high=close, low=close, close=close, volume=10.0)


@pytest.fixture
def storage():
    s = InMemoryStorage()
    s.save([_bar("AAA", 100), _bar("AAA", 200), _bar("BBB", 150), _bar("AAA", 300)])
    return s


def test_load_inclusive_range(storage):
    bars = storage.load("AAA", 100, 200)

    assert [b.timestamp for b in bars] == [100, 200]


def test_load_unknown_symbol(storage):
    with pytest.raises(UpstreamError):
        storage.load("ZZZ", 0, 1_000)


def test_load_empty_range_is_not_error(storage):
    assert storage.load("AAA", 400, 500) == []


def test_symbols(storage):
    assert storage.symbols() == ["AAA", "BBB"]


def test_to_frame_is_time_ordered():
    s = InMemoryStorage()
    s.save([_bar("AAA", 300, 3.0), _bar("AAA", 100, 1.0), _bar("AAA", 200, 2.0)])

    df = s.to_frame(s.load("AAA", 0, 1_000))

    assert list(df.columns) == list(SERIES_COLUMNS)
    assert df["timestamp"].tolist() == [100, 200, 300]
    assert df["close"].tolist() == [1.0, 2.0, 3.0]


def test_to_frame_empty():
    df = InMemoryStorage().to_frame([])

    assert df.empty
    assert list(df.columns) == list(SERIES_COLUMNS)
