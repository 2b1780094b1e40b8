from zipfgen.distributions.exceptions import (
    InvalidParameterError,
    SamplingStalledError,
)
from zipfgen.distributions.zipf_sampler import ZipfSampler

__all__ = [
    InvalidParameterError,
    SamplingStalledError,
    ZipfSampler,
]
