"""Standalone evaluation of a single cubic Bezier curve from exactly four control points."""

from __future__ import annotations

import numpy as np
from numpy.typing import DTypeLike, NDArray

from bcc.common import (
    ControlPoints,
    CurveSample,
    InvalidInputError,
    as_control_array,
    check_dtype,
    check_sample_count,
)

# Sample counts below this use the pure Python loop
NUMPY_SAMPLE_THRESHOLD: int = 70


class CubicBezierCurve:
    """Evaluate the cubic Bernstein polynomial

        B(t) = (1-t)^3*P0 + 3*t*(1-t)^2*P1 + 3*(1-t)*t^2*P2 + t^3*P3

    at t = u * (1 / sample_count) for u = 0..sample_count-1.
    """

    @staticmethod
    def _control_points(points: ControlPoints) -> NDArray[np.float64]:
        points_array = as_control_array(points)
        if len(points_array) != 4:
            raise InvalidInputError(f"Cubic Bezier curve needs exactly 4 control points, got {len(points_array)}")
        return points_array

    @classmethod
    def evaluate_python(cls, points: ControlPoints, sample_count: int) -> NDArray[np.float64]:
        """Evaluate the curve point by point using plain Python floats."""
        pt0, pt1, pt2, pt3 = cls._control_points(points).tolist()
        x0, y0 = pt0
        x1, y1 = pt1
        x2, y2 = pt2
        x3, y3 = pt3
        sample_count = check_sample_count(sample_count)

        result = np.empty((sample_count, 2), dtype=np.float64)
        if sample_count == 0:
            return result

        inv_steps = 1.0 / sample_count
        for u in range(sample_count):
            t = u * inv_steps
            omt = 1.0 - t
            result[u, 0] = omt**3 * x0 + 3.0 * t * omt**2 * x1 + 3.0 * omt * t**2 * x2 + t**3 * x3
            result[u, 1] = omt**3 * y0 + 3.0 * t * omt**2 * y1 + 3.0 * omt * t**2 * y2 + t**3 * y3
        return result

    @classmethod
    def evaluate_numpy(cls, points: ControlPoints, sample_count: int) -> NDArray[np.float64]:
        """Evaluate the curve for all parameters at once using NumPy."""
        points_array = cls._control_points(points)
        sample_count = check_sample_count(sample_count)

        t = np.arange(sample_count, dtype=np.float64) * (1.0 / sample_count) if sample_count else np.empty(0)
        omt = 1.0 - t

        x = (
            omt**3 * points_array[0, 0]
            + 3.0 * t * omt**2 * points_array[1, 0]
            + 3.0 * omt * t**2 * points_array[2, 0]
            + t**3 * points_array[3, 0]
        )
        y = (
            omt**3 * points_array[0, 1]
            + 3.0 * t * omt**2 * points_array[1, 1]
            + 3.0 * omt * t**2 * points_array[2, 1]
            + t**3 * points_array[3, 1]
        )
        return np.column_stack((x, y)).astype(np.float64, copy=False)

    @classmethod
    def evaluate(cls, points: ControlPoints, sample_count: int, dtype: DTypeLike = np.float64) -> CurveSample:
        """
        Evaluate a cubic Bezier curve into sample_count points.
        Uses pure Python for small sample counts, NumPy for larger ones.

        Args:
            points: Control points as Sequence[Tuple[float, float]] or NDArray[np.float64]
                    Must contain exactly 4 points: start, control1, control2, end
            sample_count: Number of points to compute
            dtype: Floating point type of the result (float64 or float32); the
                   computation itself always runs in float64

        Returns:
            NDArray of shape (sample_count, 2)

        Raises:
            InvalidInputError: If not exactly four control points are given or
                sample_count is not a non-negative integer, or dtype
                is neither float64 nor float32
        """
        out_dtype = check_dtype(dtype)

        sample_count = check_sample_count(sample_count)
        if sample_count < NUMPY_SAMPLE_THRESHOLD:
            result = cls.evaluate_python(points, sample_count)
        else:
            result = cls.evaluate_numpy(points, sample_count)
        return result.astype(out_dtype, copy=False)


def evaluate_cubic(points: ControlPoints, sample_count: int, dtype: DTypeLike = np.float64) -> CurveSample:
    """Evaluate a cubic Bezier curve; see CubicBezierCurve.evaluate."""
    return CubicBezierCurve.evaluate(points, sample_count, dtype)
