"""General Bezier curve evaluation for chains of two or more control points."""

from __future__ import annotations

import logging
from typing import List, Optional

import numpy as np
from numpy.typing import NDArray

from bcc.bernstein import BernsteinBasis
from bcc.common import (
    DEFAULT_SETTINGS,
    ControlPoints,
    CurveSample,
    EvaluationSettings,
    InvalidInputError,
    SampleDistribution,
    TailGroupPolicy,
    as_control_array,
    ceil_div,
    check_sample_count,
)

logger = logging.getLogger(__name__)

# Largest group evaluated as a single curve; longer chains are split into cubic pieces
MAX_GROUP_SIZE: int = 4
GROUP_STRIDE: int = MAX_GROUP_SIZE - 1


class BezierCurve:
    """Class to evaluate linear, quadratic, cubic and chained cubic Bezier curves.

    Every evaluation returns `sample_count` points sampled at
    t = k * (1 / sample_count) for k = 0..sample_count-1. The first sample is the
    first control point, the parameter never reaches 1.

    Chains of more than four control points are split into overlapping groups
    of up to four points and the samples of all groups are concatenated.
    """

    @classmethod
    def _evaluate_degree(
        cls, points: ControlPoints, sample_count: int, num_points: int, name: str
    ) -> NDArray[np.float64]:
        points_array = as_control_array(points)
        if len(points_array) != num_points:
            raise InvalidInputError(f"{name} Bezier curve needs {num_points} control points, got {len(points_array)}")
        t = BernsteinBasis.parameters(check_sample_count(sample_count))
        return BernsteinBasis.evaluate(points_array, t)

    @classmethod
    def evaluate_linear(cls, points: ControlPoints, sample_count: int) -> NDArray[np.float64]:
        """Sample the straight line (1-t)*P0 + t*P1."""
        return cls._evaluate_degree(points, sample_count, 2, "Linear")

    @classmethod
    def evaluate_quadratic(cls, points: ControlPoints, sample_count: int) -> NDArray[np.float64]:
        """Sample the quadratic curve (1-t)^2*P0 + 2*(1-t)*t*P1 + t^2*P2."""
        return cls._evaluate_degree(points, sample_count, 3, "Quadratic")

    @classmethod
    def evaluate_cubic(cls, points: ControlPoints, sample_count: int) -> NDArray[np.float64]:
        """Sample the cubic curve (1-t)^3*P0 + 3*(1-t)^2*t*P1 + 3*(1-t)*t^2*P2 + t^3*P3."""
        return cls._evaluate_degree(points, sample_count, 4, "Cubic")

    @classmethod
    def evaluate_group(cls, points: ControlPoints, sample_count: int) -> NDArray[np.float64]:
        """Dispatch two, three or four control points to the matching degree evaluator."""
        points_array = as_control_array(points)
        evaluators = {2: cls.evaluate_linear, 3: cls.evaluate_quadratic, 4: cls.evaluate_cubic}
        evaluator = evaluators.get(len(points_array))
        if evaluator is None:
            raise InvalidInputError(f"A single Bezier curve needs 2 to 4 control points, got {len(points_array)}")
        return evaluator(points_array, sample_count)

    @staticmethod
    def split_control_points(points: ControlPoints) -> List[NDArray[np.float64]]:
        """Split a control point chain into overlapping groups of up to four points.

        Groups start at every third index, so the last point of one group is the
        first point of the next one. The final group holds fewer points when the
        chain does not divide evenly, down to a single point when
        len(points) % 3 == 1.

        Args:
            points: Control points as sequence of (x, y) tuples or array

        Returns:
            List of arrays with shape (k, 2), 1 <= k <= 4, in chain order
        """
        points_array = as_control_array(points)
        return [
            points_array[start : start + MAX_GROUP_SIZE] for start in range(0, len(points_array), GROUP_STRIDE)
        ]

    @staticmethod
    def distribute_sample_count(
        sample_count: int, num_groups: int, distribution: SampleDistribution = SampleDistribution.CEIL
    ) -> int:
        """Number of samples evaluated for each group of a split chain.

        Args:
            sample_count: Requested total number of samples
            num_groups: Number of groups, a trailing single point group included
            distribution: CEIL rounds the real quotient up, TRUNCATE rounds it down

        Returns:
            Per group sample count
        """
        sample_count = check_sample_count(sample_count)
        if num_groups <= 0:
            raise InvalidInputError(f"num_groups must be positive, got {num_groups}")
        if distribution is SampleDistribution.TRUNCATE:
            return sample_count // num_groups
        return ceil_div(sample_count, num_groups)

    @classmethod
    def evaluate_segmented(
        cls, points: ControlPoints, sample_count: int, settings: EvaluationSettings = DEFAULT_SETTINGS
    ) -> NDArray[np.float64]:
        """Evaluate a chain of control points group by group and concatenate the samples.

        The output length is the per group count times the number of evaluated
        groups and can differ from sample_count. Chains of two to four points
        form a single group and give exactly sample_count samples.

        Raises:
            InvalidInputError: If the chain ends in a single point group and the
                tail policy is TailGroupPolicy.ERROR
        """
        points_array = as_control_array(points)
        if 2 <= len(points_array) <= MAX_GROUP_SIZE:
            return cls.evaluate_group(points_array, sample_count)

        groups = cls.split_control_points(points_array)
        per_group = cls.distribute_sample_count(sample_count, len(groups), settings.distribution)
        logger.debug(
            "Split %d control points into %d groups, %d samples each", len(points_array), len(groups), per_group
        )
        if per_group == 0 and sample_count > 0:
            logger.warning(
                "Sample count %d spread over %d groups gives no samples per group", sample_count, len(groups)
            )

        pieces: List[NDArray[np.float64]] = []
        for group_idx, group in enumerate(groups):
            if len(group) >= 2:
                pieces.append(cls.evaluate_group(group, per_group))
                continue

            # Single trailing point: it is the endpoint of the previous group
            if settings.tail_policy is TailGroupPolicy.ERROR:
                raise InvalidInputError(
                    f"Control point chain of length {len(points_array)} ends in a group with a single point"
                )
            if settings.tail_policy is TailGroupPolicy.EXTEND_PREVIOUS:
                pieces.append(np.repeat(group, per_group, axis=0))
            else:
                logger.debug(
                    "Dropping trailing control point group with a single point at index %d", GROUP_STRIDE * group_idx
                )

        if not pieces:
            return np.empty((0, 2), dtype=np.float64)
        return np.concatenate(pieces, axis=0)

    @classmethod
    def evaluate(
        cls, points: ControlPoints, sample_count: int, settings: EvaluationSettings = DEFAULT_SETTINGS
    ) -> CurveSample:
        """Evaluate a Bezier curve for two or more control points.

        Args:
            points: Control points as Sequence[Tuple[float, float]] or NDArray[np.float64]
            sample_count: Number of points to compute (per chain for two to four
                control points, spread over the groups for longer chains)
            settings: Evaluation options; see EvaluationSettings

        Returns:
            NDArray of shape (n, 2) with dtype settings.dtype

        Raises:
            InvalidInputError: If fewer than two control points are given or the
                inputs are malformed
        """
        points_array = as_control_array(points)
        sample_count = check_sample_count(sample_count)
        num_points = len(points_array)

        if num_points < 2:
            raise InvalidInputError(f"A Bezier curve needs at least 2 control points, got {num_points}")

        if num_points <= MAX_GROUP_SIZE:
            logger.debug("Evaluating degree %d Bezier curve with %d samples", num_points - 1, sample_count)
            result = cls.evaluate_group(points_array, sample_count)
        else:
            result = cls.evaluate_segmented(points_array, sample_count, settings)

        return result.astype(settings.dtype, copy=False)


def evaluate_general(
    points: ControlPoints, sample_count: int, settings: Optional[EvaluationSettings] = None
) -> CurveSample:
    """Evaluate a Bezier curve or chain of curves; see BezierCurve.evaluate."""
    return BezierCurve.evaluate(points, sample_count, settings if settings is not None else DEFAULT_SETTINGS)
