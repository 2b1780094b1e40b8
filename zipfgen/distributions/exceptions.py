from typing import Any


class InvalidParameterError(ValueError):
    """Raised when a sampler is constructed with an out-of-domain parameter."""

    def __init__(self, name: str, value: Any, reason: str) -> None:
        self.name = name
        self.value = value
        super().__init__(f"{name} is not {reason}: {value!r}")


class SamplingStalledError(RuntimeError):
    """Raised when the rejection loop runs past its iteration bound.

    This signals a numerically degenerate parameter combination, so the
    caller should treat it as a configuration error rather than retry.
    """

    def __init__(self, num_elements: int, exponent: float, iterations: int) -> None:
        self.num_elements = num_elements
        self.exponent = exponent
        self.iterations = iterations
        super().__init__(
            f"Zipf sampling with num_elements={num_elements}, exponent={exponent}"
            f" rejected {iterations} consecutive candidates"
        )
