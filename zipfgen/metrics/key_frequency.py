from typing import Iterable

import numpy as np
import pandas as pd
import plotly_express as px

from zipfgen.logger import init_logger

logger = init_logger(__name__)

KEY_STR = "Key"
COUNT_STR = "Count"
FREQUENCY_STR = "Frequency"
RANK_STR = "Rank"


class KeyFrequencyCounter:
    def __init__(self, num_elements: int) -> None:
        # index 0 is unused so that key k lands in slot k
        self._counts = np.zeros(num_elements + 1, dtype=np.int64)
        self._num_elements = num_elements
        self._total = 0

    def __len__(self):
        return self._total

    def _check_key_range(self, low: int, high: int) -> None:
        if low < 1 or high > self._num_elements:
            raise ValueError(
                f"Keys must lie in [1, {self._num_elements}], got range [{low}, {high}]"
            )

    def put(self, key: int) -> None:
        self._check_key_range(key, key)
        self._counts[key] += 1
        self._total += 1

    def put_many(self, keys: Iterable[int]) -> None:
        if not isinstance(keys, np.ndarray):
            keys = np.fromiter(keys, dtype=np.int64)
        if len(keys) == 0:
            return
        self._check_key_range(int(keys.min()), int(keys.max()))
        np.add.at(self._counts, keys, 1)
        self._total += len(keys)

    def count(self, key: int) -> int:
        return int(self._counts[key])

    def counts(self) -> np.ndarray:
        """Counts for keys 1..num_elements, zeros included."""
        return self._counts[1:].copy()

    def to_df(self) -> pd.DataFrame:
        keys = np.flatnonzero(self._counts)
        df = pd.DataFrame({KEY_STR: keys, COUNT_STR: self._counts[keys]})
        df[FREQUENCY_STR] = df[COUNT_STR] / max(self._total, 1)
        return df

    def sorted_counts(self) -> np.ndarray:
        counts = self._counts[self._counts > 0]
        return np.sort(counts)

    def save_sorted_counts(self, path: str) -> None:
        pd.Series(self.sorted_counts()).to_csv(path, index=False, header=False)

    def print_distribution_stats(self, plot_name: str) -> None:
        if self._total == 0:
            return

        df = self.to_df()
        logger.debug(
            f"{plot_name}: {COUNT_STR} stats:"
            f" distinct keys: {len(df)},"
            f" min: {df[COUNT_STR].min()},"
            f" max: {df[COUNT_STR].max()},"
            f" mean: {df[COUNT_STR].mean()},"
            f" median: {df[COUNT_STR].median()}"
        )

    def plot_rank_frequency(self, path: str, plot_name: str) -> None:
        if self._total == 0:
            return

        df = self.to_df().sort_values(by=[COUNT_STR], ascending=False)
        df[RANK_STR] = np.arange(1, len(df) + 1)

        self.print_distribution_stats(plot_name)

        fig = px.line(
            df,
            x=RANK_STR,
            y=FREQUENCY_STR,
            markers=True,
            log_x=True,
            log_y=True,
        )
        fig.update_traces(marker=dict(color="red", size=2))
        df.to_csv(f"{path}/{plot_name}.csv", index=False)
        fig.write_image(f"{path}/{plot_name}.png")
