import os

from zipfgen.config import DataGeneratorConfig
from zipfgen.key_generator.key_generator_registry import KeyGeneratorRegistry
from zipfgen.logger import init_logger
from zipfgen.metrics.key_frequency import KeyFrequencyCounter

logger = init_logger(__name__)


class DataGenerator:
    def __init__(self, config: DataGeneratorConfig) -> None:
        self._config = config
        self._output_config = config.output_config

        self._key_generator = KeyGeneratorRegistry.get(
            config.key_generator_config.get_type(),
            config.key_generator_config,
            config.num_elements,
        )
        self._key_frequency = KeyFrequencyCounter(config.num_elements)

        self._file_prefix = config.get_file_prefix()

    @property
    def accesses_file(self) -> str:
        return os.path.join(self._output_config.output_dir, f"{self._file_prefix}.csv")

    @property
    def sorted_freq_file(self) -> str:
        return os.path.join(
            self._output_config.output_dir, f"{self._file_prefix}_sorted_freq.csv"
        )

    @property
    def build_table_file(self) -> str:
        return os.path.join(
            self._output_config.output_dir, f"{self._config.num_elements}_build.txt"
        )

    def run(self) -> KeyFrequencyCounter:
        logger.info(
            f"Generating {self._config.num_accesses} keys over"
            f" [1, {self._config.num_elements}] with"
            f" {self._config.key_generator_config.get_type()} key generator"
        )

        if self._output_config.write_build_table:
            self._write_build_table()

        self._generate_accesses()

        if self._output_config.write_sorted_freq:
            self._key_frequency.save_sorted_counts(self.sorted_freq_file)

        if self._output_config.store_plots:
            self._key_frequency.plot_rank_frequency(
                self._output_config.output_dir, f"{self._file_prefix}_rank_frequency"
            )
        else:
            self._key_frequency.print_distribution_stats(self._file_prefix)

        logger.info(f"Output written to {self._output_config.output_dir}")

        return self._key_frequency

    def _generate_accesses(self) -> None:
        if not self._output_config.write_accesses:
            for row in range(1, self._config.num_accesses + 1):
                self._key_frequency.put(self._key_generator.get_next_key())
                self._log_progress(row)
            return

        with open(self.accesses_file, "w") as f:
            for row in range(1, self._config.num_accesses + 1):
                key = self._key_generator.get_next_key()
                f.write(f"{key}\n")
                self._key_frequency.put(key)
                self._log_progress(row)

    def _log_progress(self, row: int) -> None:
        if row % self._output_config.progress_interval == 0:
            logger.info(f"Generated {row} rows")

    def _write_build_table(self) -> None:
        with open(self.build_table_file, "w") as f:
            for row in range(1, self._config.num_elements + 1):
                f.write(f"{row}|{row}\n")
