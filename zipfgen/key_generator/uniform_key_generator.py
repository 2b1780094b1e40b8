from zipfgen.key_generator.base_key_generator import BaseKeyGenerator


class UniformKeyGenerator(BaseKeyGenerator):

    def get_next_key(self) -> int:
        return int(self._rng.integers(1, self.num_elements, endpoint=True))
