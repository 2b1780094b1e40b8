"""Bounded Zipf sampling by rejection-inversion.

Implements the method of Hörmann and Derflinger, "Rejection-inversion to
generate variates from monotone discrete distributions", ACM TOMACS 6.3
(1996), in the variant used by Apache Commons RNG: the hat integral is taken
as ``H(x) = (x^(1 - q) - 1) / (1 - q)``, which has a finite limit at
``q = 1``, so every positive exponent is supported rather than only
``q > 1``. Variates are drawn from ``[1, num_elements]``.
"""

import math
from functools import cached_property
from numbers import Integral, Real
from typing import Any

import numpy as np

from zipfgen.distributions.exceptions import (
    InvalidParameterError,
    SamplingStalledError,
)
from zipfgen.utils.random import UniformSource

# below this magnitude the helpers switch to their Taylor expansions
TAYLOR_THRESHOLD = 1e-8
DEFAULT_MAX_ITERATIONS = 100_000


def log_term(x: float) -> float:
    """log(1 + x) / x for x >= -1, with a series expansion near zero."""
    if abs(x) > TAYLOR_THRESHOLD:
        return math.log1p(x) / x
    return 1.0 - x * (0.5 - x * (1.0 / 3.0 - 0.25 * x))


def exp_term(x: float) -> float:
    """(exp(x) - 1) / x, with a series expansion near zero."""
    if abs(x) > TAYLOR_THRESHOLD:
        return math.expm1(x) / x
    return 1.0 + x * 0.5 * (1.0 + x / 3.0 * (1.0 + 0.25 * x))


def _check_positive_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise InvalidParameterError(name, value, "an integer")
    if value <= 0:
        raise InvalidParameterError(name, value, "strictly positive")
    return int(value)


def _check_positive_real(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidParameterError(name, value, "a real number")
    if not math.isfinite(value):
        raise InvalidParameterError(name, value, "finite")
    if value <= 0:
        raise InvalidParameterError(name, value, "strictly positive")
    return float(value)


class ZipfSampler:
    """Draws integers k in [1, num_elements] with P(k) proportional to k^-exponent.

    The sampler holds only constants derived from its parameters. It never
    owns a random engine: every call to :meth:`sample` takes a zero-argument
    callable returning floats in [0, 1), such as
    ``numpy.random.default_rng(seed).random``. One instance may serve
    several threads as long as each passes its own uniform source.

    Raises:
        InvalidParameterError: if ``num_elements`` is not a positive integer,
            ``exponent`` is not a finite positive real, or ``max_iterations``
            is not a positive integer.
    """

    def __init__(
        self,
        num_elements: int,
        exponent: float,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
    ) -> None:
        self._num_elements = _check_positive_int("num_elements", num_elements)
        self._exponent = _check_positive_real("exponent", exponent)
        self._max_iterations = _check_positive_int("max_iterations", max_iterations)

        self._h_integral_x1 = self._h_integral(1.5) - 1.0
        self._h_integral_num_elements = self._h_integral(self._num_elements + 0.5)
        self._s = 2.0 - self._h_integral_inv(self._h_integral(2.5) - self._h(2.0))

    @property
    def num_elements(self) -> int:
        return self._num_elements

    @property
    def exponent(self) -> float:
        return self._exponent

    @property
    def max_iterations(self) -> int:
        return self._max_iterations

    @property
    def h_integral_x1(self) -> float:
        return self._h_integral_x1

    @property
    def h_integral_num_elements(self) -> float:
        return self._h_integral_num_elements

    @property
    def s(self) -> float:
        return self._s

    def __repr__(self) -> str:
        return (
            f"ZipfSampler(num_elements={self._num_elements},"
            f" exponent={self._exponent})"
        )

    def _h_integral(self, x: float) -> float:
        # H(x), the integral of h(x)
        log_x = math.log(x)
        return exp_term((1.0 - self._exponent) * log_x) * log_x

    def _h(self, x: float) -> float:
        # h(x) = x^-exponent
        return math.exp(-self._exponent * math.log(x))

    def _h_integral_inv(self, x: float) -> float:
        t = x * (1.0 - self._exponent)
        # floating point drift can push t past the branch point of log1p
        if t < -1.0:
            t = -1.0
        if t == -1.0:
            # log1p has its pole here and the inverse diverges
            return math.inf
        return math.exp(log_term(t) * x)

    def sample(self, uniform_source: UniformSource) -> int:
        """Returns one Zipf variate, consuming one or more uniform draws.

        Candidates are rounded half up (``floor(x + 0.5)``); ``x`` is always
        positive, so ties go away from zero.

        Raises:
            SamplingStalledError: if ``max_iterations`` candidates in a row
                are rejected.
        """
        h_integral_x1 = self._h_integral_x1
        h_integral_num_elements = self._h_integral_num_elements

        for _ in range(self._max_iterations):
            # u is uniform in (h_integral_x1, h_integral_num_elements]
            u = h_integral_num_elements + uniform_source() * (
                h_integral_x1 - h_integral_num_elements
            )

            x = self._h_integral_inv(u)

            # rounding error near the ends can leave x outside
            # [0.5, num_elements + 0.5], so clamp before rounding
            if x < 1.5:
                k = 1
            elif x >= self._num_elements + 0.5:
                k = self._num_elements
            else:
                k = math.floor(x + 0.5)

            # Before the test, P(k = 1) = C and
            # P(k = m) = C * (H(m + 1/2) - H(m - 1/2)) for m >= 2,
            # with C = 1 / (h_integral_num_elements - h_integral_x1).
            #
            # For k = 1 the right-hand test always holds, since
            # H(1.5) - h(1) = h_integral_x1 < u.
            #
            # For k >= 2, f(m) = m - Hinv(H(m + 1/2) - h(m)) is non-decreasing
            # for every exponent > 0 (Theorem 2 of the paper: h' < 0 and
            # (-1 / Hinv')'' >= 0). Since s = f(2), k - x <= s implies
            # k - x <= f(k), which rearranges to u >= H(k + 1/2) - h(k). The
            # left test is therefore a cheap sufficient condition, and the
            # right one sets the acceptance rate h(m) / (H(m + 1/2) - H(m - 1/2)).
            #
            # Either way P(return m) = C * h(m) = C / m^exponent.
            if k - x <= self._s or u >= self._h_integral(k + 0.5) - self._h(k):
                return k

        raise SamplingStalledError(
            self._num_elements, self._exponent, self._max_iterations
        )

    def sample_n(self, uniform_source: UniformSource, size: int) -> np.ndarray:
        return np.fromiter(
            (self.sample(uniform_source) for _ in range(size)),
            dtype=np.int64,
            count=size,
        )

    @cached_property
    def _normalizer(self) -> float:
        ranks = np.arange(1, self._num_elements + 1, dtype=np.float64)
        return float(np.sum(np.power(ranks, -self._exponent)))

    def pmf(self, k: int) -> float:
        if k < 1 or k > self._num_elements:
            return 0.0
        return float(k) ** -self._exponent / self._normalizer

    def probabilities(self) -> np.ndarray:
        """Exact target probabilities for keys 1..num_elements."""
        ranks = np.arange(1, self._num_elements + 1, dtype=np.float64)
        weights = np.power(ranks, -self._exponent)
        return weights / weights.sum()
