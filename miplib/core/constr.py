"""Constraints ``expr <= 0`` / ``expr = 0`` and indicator constraints."""

from __future__ import annotations

from enum import Enum
from typing import Any

from miplib.core.errors import MalformedConstraintError, ReificationError
from miplib.core.expr import Expr
from miplib.core.var import Var


class ConstrType(str, Enum):
    LESS_EQUAL = "<="
    EQUAL = "="


class Constr:
    """Linear or quadratic constraint with the right-hand side folded into ``expr``.

    Construction rejects constraints that are already unsatisfiable under the
    current variable bounds. Bounds may change afterwards, so
    :meth:`must_be_satisfied` and :meth:`must_be_violated` re-evaluate them.
    """

    __slots__ = ("_type", "_expr", "_name")

    def __init__(self, ctype: ConstrType, expr: Expr, name: str | None = None) -> None:
        self._type = ConstrType(ctype)
        self._expr = Expr(expr)
        self._name = name

        lb, ub = self._expr.lb(), self._expr.ub()
        if lb > 0 or (self._type == ConstrType.EQUAL and ub < 0):
            raise MalformedConstraintError(
                f"Constraint {self} is trivially unsatisfiable: its expression lies in [{lb:g}, {ub:g}]."
            )

    @property
    def type(self) -> ConstrType:
        return self._type

    @property
    def expr(self) -> Expr:
        return self._expr.copy()

    @property
    def name(self) -> str | None:
        return self._name

    def with_name(self, name: str | None) -> "Constr":
        return Constr(self._type, self._expr, name)

    def is_linear(self) -> bool:
        return self._expr.is_linear()

    def must_be_satisfied(self) -> bool:
        if self._expr.ub() > 0:
            return False
        return self._type == ConstrType.LESS_EQUAL or self._expr.lb() >= 0

    # TODO: compare with a tolerance once the intended precision of bound checks is settled
    def must_be_violated(self) -> bool:
        if self._expr.lb() > 0:
            return True
        return self._type == ConstrType.EQUAL and self._expr.ub() < 0

    def is_reifiable(self) -> bool:
        """True if the truth value can be captured by ``expr`` or ``-expr`` alone.

        That holds for integer-valued linear equalities whose expression never
        changes sign: the expression is then zero exactly when the constraint holds, and
        at least one in absolute value otherwise.
        """
        if self._type != ConstrType.EQUAL or not self._expr.is_linear() or not self._expr.is_integral():
            return False
        return self._expr.lb() >= 0 or self._expr.ub() <= 0

    def reified(self) -> Expr:
        """Expression that is zero when the constraint holds and positive otherwise."""
        if not self.is_reifiable():
            raise ReificationError(f"Constraint {self} is not reifiable.")
        if self.must_be_satisfied():
            raise ReificationError(f"Constraint {self} is always satisfied.")
        if self.must_be_violated():
            raise ReificationError(f"Constraint {self} is always violated.")

        ub = self._expr.ub()
        if ub > 0:
            return self._expr.copy()
        if ub == 0:
            return -self._expr
        raise ReificationError(f"Constraint {self} cannot be reified.")

    def scale(
        self,
        skip_lb: float = 1e-4,
        skip_ub: float = 1e4,
        ignore_inf_var_bounds: bool = False,
    ) -> "Constr":
        from miplib.transform.scale import scale_gm

        return scale_gm(self, skip_lb=skip_lb, skip_ub=skip_ub, ignore_inf_var_bounds=ignore_inf_var_bounds)

    def __rshift__(self, other: "Constr") -> "IndicatorConstr":
        if not isinstance(other, Constr):
            return NotImplemented
        return IndicatorConstr(self, other)

    def __lshift__(self, other: Any) -> "IndicatorConstr":
        if isinstance(other, Constr):
            return IndicatorConstr(other, self)
        implicant = Expr.coerce(other)
        if implicant is None:
            return NotImplemented
        return IndicatorConstr(implicant == 1, self)

    def __bool__(self) -> bool:
        raise TypeError(f"Constraint {self} has no truth value; compare bounds or values explicitly.")

    def __str__(self) -> str:
        return f"{self._expr} {self._type.value} 0"

    def __repr__(self) -> str:
        if self._name is None:
            return f"Constr({self})"
        return f"Constr({self._name!r}: {self})"


class IndicatorConstr:
    """``implicant -> implicand``: whenever the implicant holds, so must the implicand.

    Nothing is validated here; which shapes are acceptable depends on the
    backend or on :meth:`reformulation`.
    """

    __slots__ = ("_implicant", "_implicand", "_name")

    def __init__(self, implicant: Constr, implicand: Constr, name: str | None = None) -> None:
        self._implicant = implicant
        self._implicand = implicand
        self._name = name

    @property
    def implicant(self) -> Constr:
        return self._implicant

    @property
    def implicand(self) -> Constr:
        return self._implicand

    @property
    def name(self) -> str | None:
        return self._name

    def with_name(self, name: str | None) -> "IndicatorConstr":
        return IndicatorConstr(self._implicant, self._implicand, name)

    def has_reformulation(self) -> bool:
        from miplib.transform.reformulate import has_reformulation

        return has_reformulation(self)

    def reformulation(self) -> list[Constr]:
        from miplib.transform.reformulate import reformulate

        return reformulate(self)

    def scale(
        self,
        skip_lb: float = 1e-4,
        skip_ub: float = 1e4,
        ignore_inf_var_bounds: bool = False,
    ) -> list[Constr]:
        return [
            c.scale(skip_lb=skip_lb, skip_ub=skip_ub, ignore_inf_var_bounds=ignore_inf_var_bounds)
            for c in self.reformulation()
        ]

    def __str__(self) -> str:
        return f"{self._implicant} -> {self._implicand}"

    def __repr__(self) -> str:
        return f"IndicatorConstr({self})"


def relation(lhs: Expr, rhs: Expr, ctype: ConstrType) -> Constr:
    if lhs.is_constant() and rhs.is_constant():
        raise MalformedConstraintError(f"Attempt to create a constraint from constant expressions {lhs} and {rhs}.")
    return Constr(ctype, lhs - rhs)


def negation(expr: Expr | Var) -> Constr:
    expr = Expr(expr)
    if not expr.must_be_binary():
        raise MalformedConstraintError(f"Attempt to negate possibly non-binary expression {expr}.")
    return expr == 0
