from zipfgen.types.base_int_enum import BaseIntEnum


class KeyGeneratorType(BaseIntEnum):
    UNIFORM = 1
    ZIPF = 2
