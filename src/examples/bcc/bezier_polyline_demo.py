"""Print polylines sampled from linear, quadratic, cubic and chained Bezier curves."""

import numpy as np

from bcc.bezier import evaluate_general
from bcc.bezier_cubic import evaluate_cubic
from bcc.common import REFERENCE_SETTINGS, STRICT_SETTINGS, InvalidInputError, TailGroupPolicy

CURVES = {
    "linear": [(0.0, 0.0), (10.0, 0.0)],
    "quadratic": [(0.0, 0.0), (5.0, 10.0), (10.0, 0.0)],
    "cubic": [(0.0, 0.0), (100.0, 200.0), (0.0, -200.0), (200.0, 0.0)],
    "chain_of_7": [(0.0, 0.0), (1.0, 2.0), (2.0, 2.0), (3.0, 0.0), (4.0, -2.0), (5.0, -2.0), (6.0, 0.0)],
}


def main():
    """Main"""
    np.set_printoptions(precision=3, suppress=True)

    for name, points in CURVES.items():
        samples = evaluate_general(points, 6)
        print(f"{name:>10}: {len(points)} control points -> {len(samples)} samples")
        print(samples)
        print()

    cubic_points = CURVES["cubic"]
    general = evaluate_general(cubic_points, 100)
    cubic = evaluate_cubic(cubic_points, 100)
    print("general vs cubic evaluator max deviation:", float(np.max(np.abs(general - cubic))))
    print()

    chain = CURVES["chain_of_7"]
    print(REFERENCE_SETTINGS, "->", len(evaluate_general(chain, 10, REFERENCE_SETTINGS)), "samples")
    extend = REFERENCE_SETTINGS.with_changes(tail_policy=TailGroupPolicy.EXTEND_PREVIOUS)
    print(extend, "->", len(evaluate_general(chain, 10, extend)), "samples")
    try:
        evaluate_general(chain, 10, STRICT_SETTINGS)
    except InvalidInputError as e:
        print(STRICT_SETTINGS, "->", e)


if __name__ == "__main__":
    main()
