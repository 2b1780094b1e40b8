from abc import ABC, abstractmethod

import numpy as np

from zipfgen.config import BaseKeyGeneratorConfig


class BaseKeyGenerator(ABC):

    def __init__(self, config: BaseKeyGeneratorConfig, num_elements: int):
        self.config = config
        self.num_elements = num_elements
        self._rng = np.random.default_rng(config.seed)

    @abstractmethod
    def get_next_key(self) -> int:
        pass
