from zipfgen.key_generator.uniform_key_generator import UniformKeyGenerator
from zipfgen.key_generator.zipf_key_generator import ZipfKeyGenerator
from zipfgen.types import KeyGeneratorType
from zipfgen.utils.base_registry import BaseRegistry


class KeyGeneratorRegistry(BaseRegistry):
    _key_class = KeyGeneratorType


KeyGeneratorRegistry.register(KeyGeneratorType.ZIPF, ZipfKeyGenerator)
KeyGeneratorRegistry.register(KeyGeneratorType.UNIFORM, UniformKeyGenerator)
