from zipfgen.types.base_int_enum import BaseIntEnum
from zipfgen.types.key_generator_type import KeyGeneratorType

__all__ = [
    KeyGeneratorType,
    BaseIntEnum,
]
