"""Canonical model snapshot handed to backend adapters."""

from __future__ import annotations

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, model_validator

from miplib.backends.base import BackendKind, Sense
from miplib.core.constr import Constr, ConstrType, IndicatorConstr
from miplib.core.expr import Expr
from miplib.core.var import VarType


class IRVariable(BaseModel):
    model_config = ConfigDict(ser_json_inf_nan="constants")

    index: int
    name: str | None = None
    vartype: VarType
    lb: float
    ub: float


class IRTerms(BaseModel):
    model_config = ConfigDict(ser_json_inf_nan="constants")

    lin_i: list[int] = Field(default_factory=list)
    lin_v: list[float] = Field(default_factory=list)
    q_i: list[int] = Field(default_factory=list)
    q_j: list[int] = Field(default_factory=list)
    q_v: list[float] = Field(default_factory=list)

    @model_validator(mode="after")
    def _validate_shapes(self) -> "IRTerms":
        if len(self.lin_i) != len(self.lin_v):
            raise ValueError("linear term arrays lin_i, lin_v must have equal length")
        if len(self.q_i) != len(self.q_j) or len(self.q_i) != len(self.q_v):
            raise ValueError("quadratic term arrays q_i, q_j, q_v must have equal length")
        return self

    @classmethod
    def from_expr(cls, expr: Expr) -> "IRTerms":
        return cls(
            lin_i=[v.index for v in expr.linear_vars()],
            lin_v=expr.linear_coeffs().tolist(),
            q_i=[v.index for v in expr.quad_vars_1()],
            q_j=[v.index for v in expr.quad_vars_2()],
            q_v=expr.quad_coeffs().tolist(),
        )

    def max_index(self) -> int:
        return max([-1, *self.lin_i, *self.q_i, *self.q_j])


class IRObjective(IRTerms):
    sense: Sense = Sense.MINIMIZE
    constant: float = 0.0


class IRConstraint(IRTerms):
    """``terms <= rhs`` or ``terms == rhs``; ``rhs`` is the negated expression constant."""

    name: str | None = None
    sense: ConstrType
    rhs: float = 0.0

    @classmethod
    def from_constr(cls, constr: Constr) -> "IRConstraint":
        expr = constr.expr
        terms = IRTerms.from_expr(expr)
        return cls(name=constr.name, sense=constr.type, rhs=-expr.constant(), **terms.model_dump())


class IRIndicator(BaseModel):
    model_config = ConfigDict(ser_json_inf_nan="constants")

    name: str | None = None
    implicant: IRConstraint
    implicand: IRConstraint

    @classmethod
    def from_constr(cls, constr: IndicatorConstr) -> "IRIndicator":
        return cls(
            name=constr.name,
            implicant=IRConstraint.from_constr(constr.implicant),
            implicand=IRConstraint.from_constr(constr.implicand),
        )


class IRModel(BaseModel):
    model_config = ConfigDict(ser_json_inf_nan="constants")

    backend: BackendKind = BackendKind.LOCAL
    variables: list[IRVariable]
    objective: IRObjective | None = None
    constraints: list[IRConstraint] = Field(default_factory=list)
    indicators: list[IRIndicator] = Field(default_factory=list)

    @model_validator(mode="after")
    def _validate_indices(self) -> "IRModel":
        n = len(self.variables)
        blocks: list[IRTerms] = list(self.constraints)
        blocks.extend(ic.implicant for ic in self.indicators)
        blocks.extend(ic.implicand for ic in self.indicators)
        if self.objective is not None:
            blocks.append(self.objective)
        for block in blocks:
            if block.max_index() >= n:
                raise ValueError(f"term references variable {block.max_index()}, but only {n} variables exist")
        return self

    def variable_names(self) -> list[str | None]:
        return [v.name for v in self.variables]

    def variable_types(self) -> set[VarType]:
        return {v.vartype for v in self.variables}

    def has_quadratic_constraints(self) -> bool:
        return any(c.q_v for c in self.constraints)

    def has_quadratic_objective(self) -> bool:
        return self.objective is not None and bool(self.objective.q_v)

    def linear_matrix(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """COO triplets (rows, cols, values) of the linear constraint parts."""
        rows: list[int] = []
        cols: list[int] = []
        values: list[float] = []
        for row, constr in enumerate(self.constraints):
            rows.extend([row] * len(constr.lin_i))
            cols.extend(constr.lin_i)
            values.extend(constr.lin_v)
        return np.asarray(rows, dtype=int), np.asarray(cols, dtype=int), np.asarray(values, dtype=float)
