"""In-memory backend: arena variable storage and constraint recording."""

from __future__ import annotations

import math
from dataclasses import dataclass

from miplib.backends.base import BackendKind, CapabilitySet, Sense, check_native_indicator
from miplib.core.constr import Constr, IndicatorConstr
from miplib.core.errors import UnsupportedConstraintError
from miplib.core.expr import Expr
from miplib.core.ir import IRConstraint, IRIndicator, IRModel, IRObjective, IRTerms, IRVariable
from miplib.core.var import VarType


@dataclass
class VarRecord:
    vartype: VarType
    lb: float
    ub: float
    name: str | None = None


class LocalBackend:
    """Keeps variables and posted constraints in process memory.

    Nothing is solved here; the recorded model can be exported with
    :meth:`to_ir` and handed to an engine adapter.
    """

    kind = BackendKind.LOCAL

    def __init__(self, capabilities: CapabilitySet | None = None, infinity: float = math.inf) -> None:
        if infinity <= 0:
            raise ValueError("infinity must be positive")
        self._capabilities = capabilities or CapabilitySet(
            indicator_constraints=True,
            quadratic_constraints=True,
            quadratic_objective=True,
        )
        self._infinity = float(infinity)
        self._vars: list[VarRecord] = []
        self.constraints: list[Constr] = []
        self.indicator_constraints: list[IndicatorConstr] = []
        self.objective: tuple[Sense, Expr] | None = None

    def capabilities(self) -> CapabilitySet:
        return self._capabilities

    def infinity(self) -> float:
        return self._infinity

    def create_var(self, vartype: VarType, lb: float | None, ub: float | None, name: str | None) -> int:
        if vartype not in self._capabilities.variable_types:
            raise ValueError(f"backend '{self.kind.value}' does not support {vartype.value} variables")
        if vartype == VarType.BINARY:
            lb = 0.0 if lb is None else lb
            ub = 1.0 if ub is None else ub
        else:
            lb = -self._infinity if lb is None else lb
            ub = self._infinity if ub is None else ub
        if lb > ub:
            raise ValueError(f"variable '{name or len(self._vars)}' has lb > ub")
        self._vars.append(VarRecord(vartype=vartype, lb=float(lb), ub=float(ub), name=name))
        return len(self._vars) - 1

    def num_vars(self) -> int:
        return len(self._vars)

    def var_record(self, slot: int) -> VarRecord:
        return self._vars[slot]

    def var_type(self, slot: int) -> VarType:
        return self._vars[slot].vartype

    def var_lb(self, slot: int) -> float:
        return self._vars[slot].lb

    def var_ub(self, slot: int) -> float:
        return self._vars[slot].ub

    def var_name(self, slot: int) -> str | None:
        return self._vars[slot].name

    def set_var_type(self, slot: int, vartype: VarType) -> None:
        self._vars[slot].vartype = vartype

    def set_var_lb(self, slot: int, value: float) -> None:
        self._vars[slot].lb = float(value)

    def set_var_ub(self, slot: int, value: float) -> None:
        self._vars[slot].ub = float(value)

    def set_var_name(self, slot: int, name: str | None) -> None:
        self._vars[slot].name = name

    def add_constr(self, constr: Constr) -> None:
        if not constr.is_linear() and not self._capabilities.quadratic_constraints:
            raise UnsupportedConstraintError(
                f"backend '{self.kind.value}' does not support quadratic constraint {constr}"
            )
        self.constraints.append(constr)

    def add_indicator_constr(self, constr: IndicatorConstr) -> None:
        if not self._capabilities.indicator_constraints:
            raise UnsupportedConstraintError(
                f"backend '{self.kind.value}' does not support indicator constraint {constr}"
            )
        check_native_indicator(constr)
        self.indicator_constraints.append(constr)

    def set_objective(self, sense: Sense, expr: Expr) -> None:
        if expr.is_quadratic() and not self._capabilities.quadratic_objective:
            raise UnsupportedConstraintError(f"backend '{self.kind.value}' does not support quadratic objective {expr}")
        self.objective = (Sense(sense), Expr(expr))

    def to_ir(self) -> IRModel:
        objective = None
        if self.objective is not None:
            sense, expr = self.objective
            objective = IRObjective(sense=sense, constant=expr.constant(), **IRTerms.from_expr(expr).model_dump())
        return IRModel(
            backend=self.kind,
            variables=[
                IRVariable(index=idx, name=rec.name, vartype=rec.vartype, lb=rec.lb, ub=rec.ub)
                for idx, rec in enumerate(self._vars)
            ],
            objective=objective,
            constraints=[IRConstraint.from_constr(c) for c in self.constraints],
            indicators=[IRIndicator.from_constr(c) for c in self.indicator_constraints],
        )

