"""Test module for chained (segmented) evaluation in bcc.bezier

The tests are run using pytest.
These tests cover splitting of long control point chains, the distribution of
samples over groups and the handling of a trailing single point group.
"""

import logging

import numpy as np
import pytest

from bcc.bezier import BezierCurve, evaluate_general
from bcc.common import (
    DEFAULT_SETTINGS,
    REFERENCE_SETTINGS,
    STRICT_SETTINGS,
    EvaluationSettings,
    InvalidInputError,
    SampleDistribution,
    TailGroupPolicy,
)


def make_chain(num_points):
    """Zig-zag chain of control points with distinct coordinates."""
    return [(float(i), float((-1) ** i * (i + 1))) for i in range(num_points)]


###############################################################################
# Splitting
###############################################################################


class TestSplitControlPoints:
    """Test the overlapping group split."""

    def test_seven_points_split(self):
        """7 points split into [0..3], [3..6], [6..6]."""
        chain = make_chain(7)
        groups = BezierCurve.split_control_points(chain)

        assert [len(g) for g in groups] == [4, 4, 1]
        np.testing.assert_array_equal(groups[0], chain[0:4])
        np.testing.assert_array_equal(groups[1], chain[3:7])
        np.testing.assert_array_equal(groups[2], chain[6:7])

    @pytest.mark.parametrize(
        "num_points, sizes",
        [
            (5, [4, 2]),
            (6, [4, 3]),
            (8, [4, 4, 2]),
            (9, [4, 4, 3]),
            (10, [4, 4, 4, 1]),
            (13, [4, 4, 4, 4, 1]),
        ],
    )
    def test_group_sizes(self, num_points, sizes):
        """Groups hold up to four points, the last one may be shorter."""
        groups = BezierCurve.split_control_points(make_chain(num_points))
        assert [len(g) for g in groups] == sizes

    def test_groups_share_endpoints(self):
        """The last point of a group is the first point of the next group."""
        groups = BezierCurve.split_control_points(make_chain(11))
        for previous, current in zip(groups, groups[1:]):
            np.testing.assert_array_equal(previous[-1], current[0])


###############################################################################
# Sample Distribution
###############################################################################


class TestDistributeSampleCount:
    """Test the per group sample count."""

    def test_ceil_rounds_up(self):
        """CEIL rounds the real quotient up."""
        assert BezierCurve.distribute_sample_count(10, 3) == 4
        assert BezierCurve.distribute_sample_count(9, 3) == 3
        assert BezierCurve.distribute_sample_count(1, 4) == 1

    def test_truncate_rounds_down(self):
        """TRUNCATE keeps the integer division result."""
        assert BezierCurve.distribute_sample_count(10, 3, SampleDistribution.TRUNCATE) == 3
        assert BezierCurve.distribute_sample_count(1, 4, SampleDistribution.TRUNCATE) == 0

    def test_zero_samples(self):
        """Zero samples give zero per group in both modes."""
        assert BezierCurve.distribute_sample_count(0, 3) == 0
        assert BezierCurve.distribute_sample_count(0, 3, SampleDistribution.TRUNCATE) == 0

    def test_invalid_group_count(self):
        """The group count must be positive."""
        with pytest.raises(InvalidInputError):
            BezierCurve.distribute_sample_count(10, 0)


###############################################################################
# Segmented Evaluation
###############################################################################


class TestSegmentedEvaluation:
    """Test evaluation of chains longer than four points."""

    def test_five_points_cubic_then_linear(self):
        """5 points evaluate a cubic group followed by a linear group."""
        chain = make_chain(5)
        result = evaluate_general(chain, 10)

        assert result.shape == (10, 2)
        np.testing.assert_allclose(result[:5], BezierCurve.evaluate_cubic(chain[0:4], 5))
        np.testing.assert_allclose(result[5:], BezierCurve.evaluate_linear(chain[3:5], 5))

    def test_six_points_cubic_then_quadratic(self):
        """6 points evaluate a cubic group followed by a quadratic group."""
        chain = make_chain(6)
        result = evaluate_general(chain, 7)

        # ceil(7 / 2) = 4 samples per group
        assert result.shape == (8, 2)
        np.testing.assert_allclose(result[4:], BezierCurve.evaluate_quadratic(chain[3:6], 4))

    def test_each_group_starts_at_its_first_control_point(self):
        """Every group restarts at t=0 on the shared control point."""
        chain = make_chain(9)
        result = evaluate_general(chain, 12)

        per_group = 4
        for group_idx, start in enumerate([0, 3, 6]):
            np.testing.assert_array_equal(result[group_idx * per_group], chain[start])

    def test_seven_points_tail_dropped_by_default(self, caplog):
        """The single point tail contributes no samples and is only reported at DEBUG level."""
        chain = make_chain(7)
        with caplog.at_level(logging.DEBUG, logger="bcc.bezier"):
            result = evaluate_general(chain, 9)

        # 3 groups, ceil(9 / 3) = 3 samples for each of the two real groups
        assert result.shape == (6, 2)
        dropped = [record for record in caplog.records if "single point" in record.getMessage()]
        assert len(dropped) == 1
        assert dropped[0].levelno == logging.DEBUG
        np.testing.assert_allclose(result[:3], BezierCurve.evaluate_cubic(chain[0:4], 3))
        np.testing.assert_allclose(result[3:], BezierCurve.evaluate_cubic(chain[3:7], 3))

    def test_tail_policy_error(self):
        """STRICT settings reject a trailing single point group."""
        with pytest.raises(InvalidInputError, match="single point"):
            evaluate_general(make_chain(7), 9, STRICT_SETTINGS)

    def test_tail_policy_error_without_tail(self):
        """STRICT settings accept chains that split without a single point group."""
        result = evaluate_general(make_chain(8), 9, STRICT_SETTINGS)
        assert result.shape == (9, 2)

    def test_tail_policy_extend_previous(self):
        """EXTEND_PREVIOUS repeats the final control point for the tail's share."""
        chain = make_chain(7)
        settings = DEFAULT_SETTINGS.with_changes(tail_policy=TailGroupPolicy.EXTEND_PREVIOUS)
        result = evaluate_general(chain, 9, settings)

        assert result.shape == (9, 2)
        np.testing.assert_array_equal(result[6:], [chain[6]] * 3)
        np.testing.assert_array_equal(result[-1], chain[-1])

    def test_reference_settings_reproduce_truncation(self):
        """10 points and 10 samples: 4 groups of 10 // 4 = 2, the tail dropped, 6 samples."""
        result = evaluate_general(make_chain(10), 10, REFERENCE_SETTINGS)

        assert result.shape == (6, 2)
        assert result.dtype == np.float32

    def test_default_settings_round_up(self):
        """10 points and 10 samples: ceil(10 / 4) = 3 per group, 9 samples."""
        assert evaluate_general(make_chain(10), 10).shape == (9, 2)

    def test_truncation_to_zero_warns(self, caplog):
        """Fewer samples than groups with TRUNCATE yields an empty result and a warning."""
        settings = EvaluationSettings(distribution=SampleDistribution.TRUNCATE)
        with caplog.at_level(logging.WARNING, logger="bcc.bezier"):
            result = evaluate_general(make_chain(9), 2, settings)

        assert result.shape == (0, 2)
        assert "no samples per group" in caplog.text

    def test_zero_samples(self):
        """Zero samples give an empty result for long chains as well."""
        assert evaluate_general(make_chain(12), 0).shape == (0, 2)

    @pytest.mark.parametrize("num_points", [2, 3, 4])
    def test_evaluate_segmented_short_chain_is_one_group(self, num_points, caplog):
        """Chains of two to four points give exactly sample_count samples and no dropped tail."""
        chain = make_chain(num_points)
        with caplog.at_level(logging.DEBUG, logger="bcc.bezier"):
            result = BezierCurve.evaluate_segmented(chain, 6)

        assert result.shape == (6, 2)
        np.testing.assert_allclose(result, evaluate_general(chain, 6))
        assert "Dropping" not in caplog.text

    def test_groups_dispatch_to_degree_evaluators(self, monkeypatch):
        """Every group is evaluated by the linear, quadratic or cubic evaluator of its size."""
        calls = []

        def record(name):
            original = getattr(BezierCurve, name)

            def recorder(points, sample_count):
                calls.append((name, len(points)))
                return original(points, sample_count)

            return recorder

        for name in ("evaluate_linear", "evaluate_quadratic", "evaluate_cubic"):
            monkeypatch.setattr(BezierCurve, name, staticmethod(record(name)))

        evaluate_general(make_chain(8), 9)
        assert calls == [("evaluate_cubic", 4), ("evaluate_cubic", 4), ("evaluate_linear", 2)]

        calls.clear()
        evaluate_general(make_chain(3), 4)
        assert calls == [("evaluate_quadratic", 3)]


###############################################################################
# Group Dispatch
###############################################################################


class TestEvaluateGroup:
    """Test evaluation of a single group of control points."""

    @pytest.mark.parametrize("num_points", [0, 1, 5])
    def test_rejects_other_sizes(self, num_points):
        """Only groups of two to four points form a single curve."""
        with pytest.raises(InvalidInputError, match="2 to 4"):
            BezierCurve.evaluate_group(make_chain(num_points), 4)

    def test_matches_degree_evaluator(self):
        """A group of three points gives the quadratic curve."""
        chain = make_chain(3)
        np.testing.assert_allclose(BezierCurve.evaluate_group(chain, 5), BezierCurve.evaluate_quadratic(chain, 5))
