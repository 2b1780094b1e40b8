from zipfgen.config import ZipfKeyGeneratorConfig
from zipfgen.distributions import ZipfSampler
from zipfgen.key_generator.base_key_generator import BaseKeyGenerator


class ZipfKeyGenerator(BaseKeyGenerator):

    def __init__(self, config: ZipfKeyGeneratorConfig, num_elements: int):
        super().__init__(config, num_elements)

        self.zipf_sampler = ZipfSampler(num_elements, config.exponent)

    def get_next_key(self) -> int:
        return self.zipf_sampler.sample(self._rng.random)
