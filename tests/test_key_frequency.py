import logging

import numpy as np
import pandas as pd
import plotly.graph_objects as go
import pytest

from zipfgen.metrics.key_frequency import (
    COUNT_STR,
    FREQUENCY_STR,
    KEY_STR,
    RANK_STR,
    KeyFrequencyCounter,
)


def test_put_and_count() -> None:
    counter = KeyFrequencyCounter(5)
    for key in [1, 1, 3, 5, 1, 3]:
        counter.put(key)
    assert len(counter) == 6
    assert counter.count(1) == 3
    assert counter.count(2) == 0
    assert list(counter.counts()) == [3, 0, 2, 0, 1]


def test_put_many() -> None:
    counter = KeyFrequencyCounter(4)
    counter.put_many(np.array([4, 4, 2]))
    counter.put_many(k for k in [1, 4])
    counter.put_many([])
    assert len(counter) == 5
    assert list(counter.counts()) == [1, 1, 0, 3]


def test_sorted_counts_skip_missing_keys() -> None:
    counter = KeyFrequencyCounter(6)
    counter.put_many([2, 2, 2, 6, 1, 1])
    assert list(counter.sorted_counts()) == [1, 2, 3]


def test_to_df() -> None:
    counter = KeyFrequencyCounter(3)
    counter.put_many([3, 3, 1, 3])
    df = counter.to_df()
    assert list(df[KEY_STR]) == [1, 3]
    assert list(df[COUNT_STR]) == [1, 3]
    assert list(df[FREQUENCY_STR]) == [0.25, 0.75]


def test_save_sorted_counts(tmp_path) -> None:
    counter = KeyFrequencyCounter(4)
    counter.put_many([4, 4, 1, 2, 2, 2])
    path = tmp_path / "freq.csv"
    counter.save_sorted_counts(str(path))
    assert path.read_text().split() == ["1", "2", "3"]


def test_empty_counter() -> None:
    counter = KeyFrequencyCounter(3)
    assert len(counter) == 0
    assert len(counter.sorted_counts()) == 0
    assert counter.to_df().empty
    counter.print_distribution_stats("empty")


@pytest.mark.parametrize("key", [0, -1, 6])
def test_put_rejects_out_of_range_key(key) -> None:
    counter = KeyFrequencyCounter(5)
    with pytest.raises(ValueError):
        counter.put(key)
    assert len(counter) == 0
    assert list(counter.counts()) == [0, 0, 0, 0, 0]
    assert len(counter.sorted_counts()) == 0


@pytest.mark.parametrize("keys", [[1, 0, 2], [3, -1], [5, 6]])
def test_put_many_rejects_out_of_range_keys(keys) -> None:
    counter = KeyFrequencyCounter(5)
    with pytest.raises(ValueError):
        counter.put_many(keys)
    assert len(counter) == 0
    assert list(counter.counts()) == [0, 0, 0, 0, 0]


def test_print_distribution_stats(caplog, monkeypatch) -> None:
    # the package root logger does not propagate to the capture handler
    monkeypatch.setattr(logging.getLogger("zipfgen"), "propagate", True)
    caplog.set_level(logging.DEBUG, logger="zipfgen.metrics.key_frequency")

    counter = KeyFrequencyCounter(4)
    counter.put_many([1, 1, 1, 2, 4, 4])
    counter.print_distribution_stats("accesses")

    messages = [r.getMessage() for r in caplog.records]
    assert any(
        m.startswith("accesses: Count stats:")
        and "distinct keys: 3" in m
        and "min: 1" in m
        and "max: 3" in m
        for m in messages
    )


def test_plot_rank_frequency(tmp_path, monkeypatch) -> None:
    written = []
    monkeypatch.setattr(
        go.Figure, "write_image", lambda self, path, *args, **kwargs: written.append(path)
    )

    counter = KeyFrequencyCounter(6)
    counter.put_many([2, 2, 2, 5, 1, 1, 6, 2])
    counter.plot_rank_frequency(str(tmp_path), "rank_frequency")

    assert written == [f"{tmp_path}/rank_frequency.png"]
    df = pd.read_csv(tmp_path / "rank_frequency.csv")
    assert list(df[RANK_STR]) == [1, 2, 3, 4]
    assert list(df[COUNT_STR]) == [4, 2, 1, 1]
    assert df[KEY_STR].iloc[0] == 2
