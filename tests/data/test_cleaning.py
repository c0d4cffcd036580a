#!filepath: tests/data/test_cleaning.py
import numpy as np
import pandas as pd
import pytest

from stratlab.data.cleaning import FillStrategy, fill_missing, insert_outliers_and_nans, remove_outliers


def test_remove_outliers_drops_extreme_rows():
    df = pd.DataFrame(
        {
            "timestamp": list(range(10)),
            "close": [10.0] * 9 + [1_000.0],
        }
    )

    out = remove_outliers(df, num_std=2.0)

    assert len(out) == 9
    assert out["close"].max() == 10.0
    assert out.index.tolist() == list(range(9))


def test_remove_outliers_ignores_timestamp_and_text():
    df = pd.DataFrame(
        {
            "ticker": ["A"] * 10,
            "timestamp": [0] * 9 + [10**9],
            "close": [1.0] * 10,
        }
    )

    out = remove_outliers(df)

    assert len(out) == 10


def test_remove_outliers_does_not_mutate():
    df = pd.DataFrame({"close": [1.0] * 9 + [100.0]})

    remove_outliers(df)

    assert len(df) == 10


@pytest.mark.parametrize(
    "strategy, expected",
    [
        (FillStrategy.VALUE, 0.0),
        (FillStrategy.MEAN, 2.0),
        ("median", 2.0),
    ],
)
def test_fill_missing(strategy, expected):
    df = pd.DataFrame({"close": [1.0, np.nan, 3.0], "ticker": ["A", "A", "A"]})

    out = fill_missing(df, strategy)

    assert out["close"].tolist() == [1.0, expected, 3.0]
    assert df["close"].isna().sum() == 1


def test_fill_missing_custom_value_and_none():
    df = pd.DataFrame({"close": [np.nan, 2.0]})

    assert fill_missing(df, FillStrategy.VALUE, fill_value=-1.0)["close"].tolist() == [-1.0, 2.0]
    assert fill_missing(df, FillStrategy.NONE)["close"].isna().sum() == 1


def test_fill_missing_unknown_strategy():
    with pytest.raises(ValueError):
        fill_missing(pd.DataFrame({"close": [1.0]}), "zero")


def test_insert_outliers_and_nans_is_seeded(make_series):
    df = make_series([float(x) for x in range(1, 41)])

    a = insert_outliers_and_nans(df, np.random.default_rng(7))
    b = insert_outliers_and_nans(df, np.random.default_rng(7))

    pd.testing.assert_frame_equal(a, b)
    assert not a["close"].equals(df["close"])
    assert df["close"].notna().all()
    assert a["timestamp"].equals(df["timestamp"])
