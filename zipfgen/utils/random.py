import os
import random
from typing import Callable

import numpy as np

UniformSource = Callable[[], float]


def set_seeds(seed=42):
    random.seed(seed)
    os.environ["PYTHONHASHSEED"] = str(seed)
    np.random.seed(seed)
