"""Central module containing types, settings and input checks for Bezier curve evaluation."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, auto
from numbers import Integral
from typing import Sequence, Tuple, Union

import numpy as np
from numpy.typing import DTypeLike, NDArray

###############################################################################
# Types
###############################################################################


Point = Tuple[float, float]  # (x, y)

ControlPoints = Union[Sequence[Point], Sequence[Sequence[float]], NDArray[np.float64]]

CurveSample = NDArray[np.floating]  # shape (n, 2), one row per parameter value


###############################################################################
# Errors
###############################################################################


class InvalidInputError(ValueError):
    """Raised when control points, sample counts or settings are not usable for evaluation."""


###############################################################################
# Enums and Consts
###############################################################################


class TailGroupPolicy(Enum):
    """How a trailing control point group holding a single point is handled.

    A chain of more than four points is split into overlapping groups of up to
    four points. When the number of points is congruent to 1 modulo 3 the last
    group contains just the final control point, which defines no curve.
    """

    DROP = auto()  # contribute no samples
    ERROR = auto()  # raise InvalidInputError
    EXTEND_PREVIOUS = auto()  # repeat the previous group's endpoint


class SampleDistribution(Enum):
    """How a requested sample count is shared between control point groups."""

    CEIL = auto()  # ceil(sample_count / num_groups)
    TRUNCATE = auto()  # sample_count // num_groups


_SUPPORTED_DTYPES = (np.dtype(np.float64), np.dtype(np.float32))


def check_dtype(dtype: DTypeLike) -> np.dtype:
    """Normalize an output dtype, e.g. np.float32 or "float32", to a dtype instance.

    Raises:
        InvalidInputError: If dtype is not a NumPy dtype or neither float64 nor float32.
    """
    try:
        normalized = np.dtype(dtype)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"dtype {dtype!r} is not a NumPy dtype") from e
    if normalized not in _SUPPORTED_DTYPES:
        raise InvalidInputError(f"dtype must be float64 or float32, got {normalized}")
    return normalized


###############################################################################
# Settings
###############################################################################


@dataclass(frozen=True)
class EvaluationSettings:
    """Options for the general Bezier evaluator.

    Attributes:
        tail_policy: Handling of a trailing single point group in segmented evaluation.
        distribution: Rounding used when spreading the sample count over groups.
        dtype: Floating point type of the returned samples. All intermediate
            values are computed in float64 regardless of this setting.
    """

    tail_policy: TailGroupPolicy = TailGroupPolicy.DROP
    distribution: SampleDistribution = SampleDistribution.CEIL
    dtype: np.dtype = np.dtype(np.float64)

    def __post_init__(self) -> None:
        if not isinstance(self.tail_policy, TailGroupPolicy):
            raise InvalidInputError(f"tail_policy must be a TailGroupPolicy, got {self.tail_policy!r}")
        if not isinstance(self.distribution, SampleDistribution):
            raise InvalidInputError(f"distribution must be a SampleDistribution, got {self.distribution!r}")
        object.__setattr__(self, "dtype", check_dtype(self.dtype))

    def with_changes(self, **changes) -> EvaluationSettings:
        """Return a copy of these settings with the given fields replaced."""
        return replace(self, **changes)

    def __str__(self) -> str:
        return (
            f"EvaluationSettings(tail={self.tail_policy.name:>15}"
            f", distribution={self.distribution.name:>8}"
            f", dtype={str(self.dtype):>7})"
        )


# Settings presets
DEFAULT_SETTINGS = EvaluationSettings()
REFERENCE_SETTINGS = EvaluationSettings(
    tail_policy=TailGroupPolicy.DROP,
    distribution=SampleDistribution.TRUNCATE,
    dtype=np.dtype(np.float32),
)
STRICT_SETTINGS = EvaluationSettings(tail_policy=TailGroupPolicy.ERROR)


###############################################################################
# Functions
###############################################################################


def as_control_array(points: ControlPoints) -> NDArray[np.float64]:
    """Copy control points into a fresh float64 array of shape (n, 2).

    Args:
        points: Sequence of (x, y) pairs or an array of shape (n, 2).

    Returns:
        New array; the caller's data is never referenced or modified.

    Raises:
        InvalidInputError: If the points are not 2D coordinates or not finite.
    """
    try:
        points_array = np.array(points, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Control points must be (x, y) pairs: {e}") from e

    if points_array.ndim == 1 and points_array.size == 0:
        return np.empty((0, 2), dtype=np.float64)
    if points_array.ndim != 2 or points_array.shape[1] != 2:
        raise InvalidInputError(f"Control points must have shape (n, 2), got {points_array.shape}")
    if not np.all(np.isfinite(points_array)):
        raise InvalidInputError("Control points must be finite")
    return points_array


def check_sample_count(sample_count: int) -> int:
    """Validate a requested sample count and return it as a plain int.

    Raises:
        InvalidInputError: If the count is not a non-negative integer.
    """
    if isinstance(sample_count, (bool, np.bool_)) or not isinstance(sample_count, Integral):
        raise InvalidInputError(f"sample_count must be an integer, got {type(sample_count).__name__}")
    if sample_count < 0:
        raise InvalidInputError(f"sample_count must not be negative, got {sample_count}")
    return int(sample_count)


def ceil_div(numerator: int, denominator: int) -> int:
    """Ceiling of the real quotient numerator / denominator, exact for large integers."""
    return -(-numerator // denominator)
