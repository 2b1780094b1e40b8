import numpy as np
import pytest

from zipfgen.config import UniformKeyGeneratorConfig, ZipfKeyGeneratorConfig
from zipfgen.key_generator.key_generator_registry import KeyGeneratorRegistry
from zipfgen.key_generator.uniform_key_generator import UniformKeyGenerator
from zipfgen.key_generator.zipf_key_generator import ZipfKeyGenerator
from zipfgen.types import KeyGeneratorType


def test_registry_lookup() -> None:
    zipf = KeyGeneratorRegistry.get(
        KeyGeneratorType.ZIPF, ZipfKeyGeneratorConfig(exponent=1.2), 100
    )
    assert isinstance(zipf, ZipfKeyGenerator)

    uniform = KeyGeneratorRegistry.get_from_str(
        "uniform", UniformKeyGeneratorConfig(), 100
    )
    assert isinstance(uniform, UniformKeyGenerator)


def test_registry_unknown_key() -> None:
    with pytest.raises(ValueError):
        KeyGeneratorRegistry.get_from_str("pareto", UniformKeyGeneratorConfig(), 10)


def test_key_generator_type_str() -> None:
    assert str(KeyGeneratorType.ZIPF) == "zipf"
    assert KeyGeneratorType.from_str("UNIFORM") == KeyGeneratorType.UNIFORM


def test_zipf_key_generator_seeded() -> None:
    config = ZipfKeyGeneratorConfig(seed=5, exponent=0.99)
    a = ZipfKeyGenerator(config, 1000)
    b = ZipfKeyGenerator(config, 1000)
    keys_a = [a.get_next_key() for _ in range(500)]
    keys_b = [b.get_next_key() for _ in range(500)]
    assert keys_a == keys_b
    assert all(1 <= k <= 1000 for k in keys_a)
    assert a.zipf_sampler.exponent == 0.99


def test_zipf_key_generator_skew() -> None:
    generator = ZipfKeyGenerator(ZipfKeyGeneratorConfig(seed=1, exponent=2.0), 50)
    keys = np.array([generator.get_next_key() for _ in range(5000)])
    # P(1) is about 0.62 for n = 50, exponent = 2
    assert np.mean(keys == 1) > 0.5


def test_uniform_key_generator() -> None:
    generator = UniformKeyGenerator(UniformKeyGeneratorConfig(seed=3), 5)
    keys = [generator.get_next_key() for _ in range(2000)]
    assert set(keys) == {1, 2, 3, 4, 5}
    assert all(isinstance(k, int) for k in keys)


def test_zipf_config_rejects_zero_skew() -> None:
    with pytest.raises(ValueError):
        ZipfKeyGeneratorConfig(exponent=0.0)
