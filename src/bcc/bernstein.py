"""Bernstein polynomial basis used to blend Bezier control points of any degree."""

from __future__ import annotations

import math
from functools import lru_cache

import numpy as np
from numpy.typing import NDArray

from bcc.common import InvalidInputError


@lru_cache(maxsize=16)
def _binomial_row(degree: int) -> tuple:
    return tuple(math.comb(degree, k) for k in range(degree + 1))


class BernsteinBasis:
    """Evaluate Bezier curves through the Bernstein basis.

    For a curve of degree n with control points P0..Pn:
        B(t) = sum_k C(n, k) * t^k * (1-t)^(n-k) * Pk

    All values are computed in float64.
    """

    @staticmethod
    def binomial_coefficients(degree: int) -> NDArray[np.float64]:
        """Binomial coefficients C(degree, k) for k = 0..degree.

        Raises:
            InvalidInputError: If degree is negative.
        """
        if degree < 0:
            raise InvalidInputError(f"Bezier degree must not be negative, got {degree}")
        return np.array(_binomial_row(int(degree)), dtype=np.float64)

    @staticmethod
    def parameters(sample_count: int) -> NDArray[np.float64]:
        """Half-open parameter grid t_k = k * (1 / sample_count), k = 0..sample_count-1.

        The increment is always computed with real division, so t = 1 is never reached
        and the first value is exactly 0.
        """
        if sample_count <= 0:
            return np.empty(0, dtype=np.float64)
        increment = 1.0 / sample_count
        return np.arange(sample_count, dtype=np.float64) * increment

    @classmethod
    def basis_matrix(cls, degree: int, t: NDArray[np.float64]) -> NDArray[np.float64]:
        """Bernstein basis values for every parameter in t.

        Args:
            degree: Polynomial degree n (number of control points minus one)
            t: Parameter values, shape (m,)

        Returns:
            NDArray[np.float64] of shape (m, degree+1); column k holds C(n,k) * t^k * (1-t)^(n-k)
        """
        coefficients = cls.binomial_coefficients(degree)
        t = np.asarray(t, dtype=np.float64).reshape(-1, 1)
        omt = 1.0 - t
        powers = np.arange(degree + 1, dtype=np.float64)
        return coefficients * t**powers * omt ** (degree - powers)

    @classmethod
    def evaluate(cls, points: NDArray[np.float64], t: NDArray[np.float64]) -> NDArray[np.float64]:
        """Blend control points with the basis of matching degree.

        Args:
            points: Control points, shape (n+1, 2)
            t: Parameter values, shape (m,)

        Returns:
            NDArray[np.float64] of shape (m, 2)
        """
        points = np.asarray(points, dtype=np.float64)
        if points.ndim != 2 or points.shape[0] == 0:
            raise InvalidInputError(f"Bernstein evaluation needs an (n, 2) control array, got {points.shape}")
        return cls.basis_matrix(points.shape[0] - 1, t) @ points
