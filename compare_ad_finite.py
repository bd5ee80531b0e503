"""Quick comparison of dual-number derivatives with difference quotients.

Run with:
    python compare_ad_finite.py

For every test function the exact (closed-form) derivative is compared
with the forward-mode AD result and with forward and central difference
quotients of shrinking step size. AD stays at rounding level, the
difference quotients first improve and then lose accuracy to cancellation.
"""

from __future__ import annotations

from typing import Any

from dualkit.dual.functions import cos, exp, sin, sqrt
from dualkit.forward.derivative import derivative
from dualkit.utils.numerics import central_difference, forward_difference, relative_error
from dualkit.utils.sandbox import generate_test_function


def main() -> None:
    """Main comparison routine."""
    # Functions to test: name -> (f, analytic df)
    cases: list[dict[str, Any]] = [
        {
            "name": "sin",
            "f": generate_test_function("sin")[0],
            "df": generate_test_function("sin")[1],
            "x0_grid": [0.1, 0.7, 1.3],
        },
        {
            "name": "log(x^2 + exp(sin x))",
            "f": generate_test_function("log_exp_sin")[0],
            "df": generate_test_function("log_exp_sin")[1],
            "x0_grid": [0.5, 1.0, 2.0],
        },
        {
            "name": "heron (10 steps)",
            "f": generate_test_function("heron")[0],
            "df": generate_test_function("heron")[1],
            "x0_grid": [2.0, 100.0],
        },
        # delicate functions
        {
            "name": "gaussian * sin(10x)",
            "f": lambda x: exp(-x ** 2) * sin(10.0 * x),
            # d/dx [e^{-x^2} sin(10x)] = e^{-x^2} * (10 cos(10x) - 2x sin(10x))
            "df": lambda x: exp(-x ** 2) * (
                    10.0 * cos(10.0 * x) - 2.0 * x * sin(10.0 * x)
            ),
            "x0_grid": [-0.7, -0.2, 0.4],
        },
        {
            "name": "Runge 1 / (1 + 25x^2)",
            "f": lambda x: 1.0 / (1.0 + 25.0 * x ** 2),
            # d/dx [1/(1+25x^2)] = -50x / (1+25x^2)^2
            "df": lambda x: -50.0 * x / (1.0 + 25.0 * x ** 2) ** 2,
            "x0_grid": [-0.9, -0.5, 0.5, 0.9],
        },
        {
            "name": "soft-abs sqrt(x^2 + eps)",
            "f": lambda x, eps=1e-4: sqrt(x ** 2 + eps),
            # d/dx sqrt(x^2 + eps) = x / sqrt(x^2 + eps)
            "df": lambda x, eps=1e-4: x / sqrt(x ** 2 + eps),
            "x0_grid": [-0.2, -0.02, 0.02, 0.2],
        },
    ]

    steps = [1e-2, 1e-5, 1e-8, 1e-11]

    line = "-" * 80

    for case in cases:
        f = case["f"]
        df = case["df"]

        print(line)
        print(f"Function: {case['name']!r}")
        print(line)

        for x0 in case["x0_grid"]:
            truth = float(df(x0))
            print(f"\nx0 = {x0:.6g}, analytic = {truth:.12g}")
            print("  {:>18s}  {:>18s}  {:>18s}".format("method", "estimate", "rel_err"))
            print("  " + "-" * 60)

            estimates = [("dual", derivative(f, float(x0)))]
            for h in steps:
                estimates.append((f"forward h={h:.0e}", forward_difference(f, x0, h)))
                estimates.append((f"central h={h:.0e}", central_difference(f, x0, h)))

            for label, est in estimates:
                est_f = float(est)
                err = relative_error(est_f, truth)
                print(f"  {label:>18s}  {est_f:18.10e}  {err:18.10e}")

        print()  # blank line between functions


if __name__ == "__main__":
    main()
