"""Backend protocols and capability schemas."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Protocol

from pydantic import BaseModel, Field

from miplib.core.constr import Constr, ConstrType, IndicatorConstr
from miplib.core.errors import UnsupportedConstraintError
from miplib.core.var import VarType

if TYPE_CHECKING:
    from miplib.core.expr import Expr


class BackendKind(str, Enum):
    GUROBI = "gurobi"
    SCIP = "scip"
    LPSOLVE = "lpsolve"
    LOCAL = "local"
    ANY = "any"


class Sense(str, Enum):
    MAXIMIZE = "max"
    MINIMIZE = "min"


class CapabilitySet(BaseModel):
    variable_types: set[VarType] = Field(
        default_factory=lambda: {VarType.CONTINUOUS, VarType.BINARY, VarType.INTEGER}
    )
    indicator_constraints: bool = False
    quadratic_constraints: bool = False
    quadratic_objective: bool = False


class VarStore(Protocol):
    """Where variables live. The modeling core only reads through this."""

    def infinity(self) -> float:
        ...

    def create_var(self, vartype: VarType, lb: float | None, ub: float | None, name: str | None) -> int:
        ...

    def var_type(self, slot: int) -> VarType:
        ...

    def var_lb(self, slot: int) -> float:
        ...

    def var_ub(self, slot: int) -> float:
        ...

    def var_name(self, slot: int) -> str | None:
        ...

    def set_var_type(self, slot: int, vartype: VarType) -> None:
        ...

    def set_var_lb(self, slot: int, value: float) -> None:
        ...

    def set_var_ub(self, slot: int, value: float) -> None:
        ...

    def set_var_name(self, slot: int, name: str | None) -> None:
        ...


class Backend(VarStore, Protocol):
    kind: BackendKind

    def capabilities(self) -> CapabilitySet:
        ...

    def add_constr(self, constr: Constr) -> None:
        ...

    def add_indicator_constr(self, constr: IndicatorConstr) -> None:
        ...

    def set_objective(self, sense: Sense, expr: "Expr") -> None:
        ...


def check_native_indicator(constr: IndicatorConstr) -> None:
    """Engines take ``binary == 0/1 -> linear constraint``; reject anything else."""
    implicant, implicand = constr.implicant, constr.implicand
    expr = implicant.expr
    if implicant.type != ConstrType.EQUAL:
        raise UnsupportedConstraintError(f"indicator implicant {implicant} must be an equation")
    if not expr.is_linear() or expr.arity() != 1:
        raise UnsupportedConstraintError(f"indicator implicant {implicant} must involve a single variable")
    [var] = expr.vars()
    if var.type() != VarType.BINARY:
        raise UnsupportedConstraintError(f"indicator implicant {implicant} must involve a binary variable")
    [coeff] = expr.linear_coeffs().tolist()
    if -expr.constant() / coeff not in (0.0, 1.0):
        raise UnsupportedConstraintError(f"indicator implicant {implicant} must fix its variable to 0 or 1")
    if not implicand.is_linear():
        raise UnsupportedConstraintError(f"indicator implicand {implicand} must be linear")


def is_native_indicator(constr: IndicatorConstr) -> bool:
    try:
        check_native_indicator(constr)
    except UnsupportedConstraintError:
        return False
    return True
