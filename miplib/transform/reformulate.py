"""Big-M reformulation of indicator constraints into plain constraints."""

from __future__ import annotations

from miplib.core.constr import Constr, ConstrType, IndicatorConstr
from miplib.core.errors import ReformulationError


def has_reformulation(constr: IndicatorConstr) -> bool:
    if not constr.implicant.is_reifiable():
        return False
    expr = constr.implicand.expr
    inf = expr.infinity()
    if expr.ub() >= inf:
        return False
    if constr.implicand.type == ConstrType.EQUAL:
        return expr.lb() > -inf
    return True


def reformulate(constr: IndicatorConstr) -> list[Constr]:
    """Replace ``implicant -> implicand`` by constraints using the implicand's bounds as M.

    With ``r`` the reified implicant (zero exactly when it holds), the
    implicand ``e <= 0`` becomes ``e <= ub(e) * r`` and an equality additionally
    gets ``lb(e) * r <= e``. Sides that are already implied by the bounds are
    left out, so zero, one or two constraints come back.
    """
    implicant, implicand = constr.implicant, constr.implicand
    if not implicant.is_reifiable():
        raise ReformulationError(f"Cannot reformulate {constr}: implicant {implicant} is not reifiable.")

    expr = implicand.expr
    inf = expr.infinity()
    ub = expr.ub()
    if ub >= inf:
        raise ReformulationError(
            f"Cannot reformulate {constr}: {expr} has no finite upper bound. "
            "Try bounding the domain of the involved variables."
        )

    indicator = implicant.reified()
    result: list[Constr] = []
    if ub > 0:
        result.append(expr <= ub * indicator)

    if implicand.type == ConstrType.LESS_EQUAL:
        return result

    lb = expr.lb()
    if lb <= -inf:
        raise ReformulationError(
            f"Cannot reformulate {constr}: {expr} has no finite lower bound. "
            "Try bounding the domain of the involved variables."
        )
    if lb < 0:
        result.append(lb * indicator <= expr)
    return result
