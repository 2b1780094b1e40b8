import json
import math
import os
from abc import ABC
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from zipfgen.config.base_poly_config import BasePolyConfig
from zipfgen.config.flat_dataclass import create_flat_dataclass
from zipfgen.config.utils import dataclass_to_dict
from zipfgen.logger import init_logger
from zipfgen.types import KeyGeneratorType

logger = init_logger(__name__)


@dataclass
class BaseKeyGeneratorConfig(BasePolyConfig):
    seed: int = field(
        default=42,
        metadata={"help": "Seed for the key generator's random number generator."},
    )


@dataclass
class ZipfKeyGeneratorConfig(BaseKeyGeneratorConfig):
    exponent: float = field(
        default=0.99,
        metadata={"help": "Skew (exponent) of the Zipf key distribution."},
    )

    def __post_init__(self):
        if not (math.isfinite(self.exponent) and self.exponent > 0):
            raise ValueError(
                f"Zipf exponent must be finite and strictly positive, got {self.exponent}."
                " Use the uniform key generator for zero skew."
            )

    @staticmethod
    def get_type():
        return KeyGeneratorType.ZIPF

    def get_skew(self) -> float:
        return self.exponent


@dataclass
class UniformKeyGeneratorConfig(BaseKeyGeneratorConfig):

    @staticmethod
    def get_type():
        return KeyGeneratorType.UNIFORM

    def get_skew(self) -> float:
        return 0.0


@dataclass
class OutputConfig:
    """Output configuration."""

    output_dir: str = field(
        default="datagen_output",
        metadata={"help": "Output directory."},
    )
    write_accesses: bool = field(
        default=True,
        metadata={"help": "Whether to write the access stream, one key per line."},
    )
    write_sorted_freq: bool = field(
        default=True,
        metadata={"help": "Whether to write the ascending per-key counts."},
    )
    write_build_table: bool = field(
        default=False,
        metadata={"help": "Whether to write the `row|row` build relation."},
    )
    store_plots: bool = field(
        default=False,
        metadata={"help": "Whether to store the rank/frequency plot."},
    )
    progress_interval: int = field(
        default=1_000_000,
        metadata={"help": "Log progress every this many generated rows."},
    )

    def __post_init__(self):
        if self.progress_interval <= 0:
            raise ValueError(
                f"progress_interval must be positive, got {self.progress_interval}."
            )
        self.output_dir = (
            f"{self.output_dir}/{datetime.now().strftime('%Y-%m-%d_%H-%M-%S-%f')}"
        )
        os.makedirs(self.output_dir, exist_ok=True)


@dataclass
class DataGeneratorConfig(ABC):
    seed: int = field(
        default=42,
        metadata={"help": "Seed for the global random number generators."},
    )
    log_level: str = field(
        default="info",
        metadata={"help": "Logging level."},
    )
    num_elements: int = field(
        default=1_000_000,
        metadata={"help": "Number of distinct keys; keys are drawn from [1, n]."},
    )
    num_accesses: int = field(
        default=10_000_000,
        metadata={"help": "Number of keys to generate."},
    )
    key_generator_config: BaseKeyGeneratorConfig = field(
        default_factory=ZipfKeyGeneratorConfig,
        metadata={"help": "Key generator config."},
    )
    output_config: OutputConfig = field(
        default_factory=OutputConfig,
        metadata={"help": "Output config."},
    )

    def __post_init__(self):
        if self.num_elements <= 0:
            raise ValueError(f"num_elements must be positive, got {self.num_elements}.")
        if self.num_accesses < 0:
            raise ValueError(
                f"num_accesses must be non-negative, got {self.num_accesses}."
            )
        self.write_config_to_file()

    @classmethod
    def create_from_cli_args(cls, argv: Optional[List[str]] = None):
        flat_config = create_flat_dataclass(cls).create_from_cli_args(argv)
        instance = flat_config.reconstruct_original_dataclass()
        instance.__flat_config__ = flat_config
        return instance

    def get_file_prefix(self) -> str:
        # six decimals, as in "1000_100000_0.990000"
        skew = self.key_generator_config.get_skew()
        return f"{self.num_elements}_{self.num_accesses}_{skew:.6f}"

    def to_dict(self):
        if not hasattr(self, "__flat_config__"):
            logger.warning("Flat config not found. Returning the original config.")
            return self.__dict__

        return self.__flat_config__.__dict__

    def write_config_to_file(self):
        config_dict = dataclass_to_dict(self)
        with open(f"{self.output_config.output_dir}/config.json", "w") as f:
            json.dump(config_dict, f, indent=4)
