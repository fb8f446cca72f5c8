"""Geometric-mean scaling of constraint coefficients."""

from __future__ import annotations

import logging
import math

from miplib.core.constr import Constr
from miplib.core.errors import ScalingError

logger = logging.getLogger(__name__)

DEFAULT_SKIP_LB = 1e-4
DEFAULT_SKIP_UB = 1e4
DEFAULT_AMPLITUDE_WARNING = 1e8


def nearest_power_of_two(n: float) -> float:
    return 2.0 ** round(math.log2(n))


def next_power_of_two(n: float) -> float:
    return 2.0 ** math.ceil(math.log2(n))


def nice_power_of_two(n: float) -> float:
    """Round up to a power of two below one, to the nearest one otherwise."""
    if n <= 0:
        raise ValueError(f"expected a positive number, got {n}")
    if math.log2(n) < 0:
        return next_power_of_two(n)
    return nearest_power_of_two(n)


def scale_gm(
    constr: Constr,
    skip_lb: float = DEFAULT_SKIP_LB,
    skip_ub: float = DEFAULT_SKIP_UB,
    ignore_inf_var_bounds: bool = False,
    amplitude_warning: float = DEFAULT_AMPLITUDE_WARNING,
) -> Constr:
    """Rescale ``constr`` so its term amplitudes are centred around 1.

    The factor ``1 / c`` is chosen so that ``[minmax / c, maxmax / c]`` together
    with the implicit unit amplitude minimises
    ``log(new_min) ** 2 + log(new_max) ** 2``, then snapped to a power of two so
    multiplying by it is exact. Constraints already within
    ``[skip_lb, skip_ub]`` are returned as they are.

    Based on J. A. Tomlin, "On scaling linear programming problems", 1975.
    """
    expr = constr.expr
    minmax, maxmax = expr.numerical_range(ignore_inf_var_bounds)

    inf = expr.infinity()
    if minmax >= inf or maxmax >= inf:
        raise ScalingError(f"All variables of {constr} must have finite bounds to scale it.")

    if maxmax == 0 or (minmax >= skip_lb and maxmax <= skip_ub):
        return constr

    if maxmax <= 1:
        c = math.sqrt(minmax)
    elif minmax <= 1:
        c = math.sqrt(minmax * maxmax)
    else:
        c = math.sqrt(maxmax)

    new_max = max(1 / c, maxmax / c)
    new_min = min(1 / c, minmax / c)
    if not ignore_inf_var_bounds and new_max / new_min >= amplitude_warning:
        logger.warning(
            "Constraint terms differ more than %g times - expect numerical issues!: | %s | in [%g, %g]",
            amplitude_warning,
            expr,
            new_min,
            new_max,
        )

    factor = nice_power_of_two(1 / c)
    return Constr(constr.type, factor * expr, constr.name)
