from abc import ABC
from dataclasses import dataclass


@dataclass
class BasePolyConfig(ABC):
    """Base for config families whose concrete subclass is picked by `get_type()`."""
