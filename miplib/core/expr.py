"""Value-semantic linear/quadratic expressions."""

from __future__ import annotations

import math
from numbers import Real
from typing import TYPE_CHECKING, Any, Union

import numpy as np

from miplib.core.errors import ModelingError, NonConstantDivisorError
from miplib.core.terms import TermMap, format_terms
from miplib.core.var import Var, VarPair, VarType

if TYPE_CHECKING:
    from miplib.backends.base import VarStore
    from miplib.core.constr import Constr, IndicatorConstr

Operand = Union["Expr", Var, float, int]


def _extended(bound: float, inf: float) -> float:
    if bound >= inf:
        return math.inf
    if bound <= -inf:
        return -math.inf
    return float(bound)


def _times(a: float, b: float) -> float:
    # 0 * inf is taken as 0: a variable fixed at zero kills the product.
    if a == 0 or b == 0:
        return 0.0
    return a * b


def _product_range(pair: VarPair, inf: float) -> tuple[float, float]:
    x, y = pair
    xl, xu = _extended(x.lb(), inf), _extended(x.ub(), inf)
    if pair.is_square():
        yl, yu = xl, xu
    else:
        yl, yu = _extended(y.lb(), inf), _extended(y.ub(), inf)

    products = [_times(xl, yl), _times(xl, yu), _times(xu, yl), _times(xu, yu)]
    lo, hi = min(products), max(products)
    if pair.is_square() and xl < 0 < xu:
        lo = 0.0
    return lo, hi


def _is_integral(value: float) -> bool:
    return float(value).is_integer()


class Expr:
    """Polynomial of degree at most two.

    Every ``Expr`` owns its own :class:`TermMap`; binary operators return new
    expressions and in-place operators only touch the left operand.
    """

    __slots__ = ("_terms",)

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, value: Operand | TermMap = 0.0) -> None:
        if isinstance(value, Expr):
            self._terms = value._terms.copy()
        elif isinstance(value, Var):
            self._terms = TermMap.from_var(value)
        elif isinstance(value, TermMap):
            self._terms = value.copy()
        elif isinstance(value, Real):
            self._terms = TermMap(float(value))
        else:
            raise TypeError(f"cannot build an expression from {type(value).__name__}")

    @classmethod
    def coerce(cls, value: Any) -> "Expr | None":
        if isinstance(value, Expr):
            return value
        if isinstance(value, (Var, Real)):
            return cls(value)
        return None

    def copy(self) -> "Expr":
        return Expr(self)

    def __copy__(self) -> "Expr":
        return self.copy()

    def is_constant(self) -> bool:
        return not self._terms.linear and not self._terms.quad

    def is_linear(self) -> bool:
        return not self._terms.quad

    def is_quadratic(self) -> bool:
        return bool(self._terms.quad)

    def constant(self) -> float:
        return self._terms.constant

    def vars(self) -> list[Var]:
        seen: dict[Var, None] = {}
        for var in self._terms.linear:
            seen.setdefault(var, None)
        for pair in self._terms.quad:
            seen.setdefault(pair.first, None)
            seen.setdefault(pair.second, None)
        return sorted(seen, key=lambda v: v._order_key())

    def arity(self) -> int:
        return len(self.vars())

    def linear_vars(self) -> list[Var]:
        return list(self._terms.linear)

    def linear_coeffs(self) -> np.ndarray:
        return np.fromiter(self._terms.linear.values(), dtype=float, count=len(self._terms.linear))

    def quad_vars_1(self) -> list[Var]:
        return [pair.first for pair in self._terms.quad]

    def quad_vars_2(self) -> list[Var]:
        return [pair.second for pair in self._terms.quad]

    def quad_coeffs(self) -> np.ndarray:
        return np.fromiter(self._terms.quad.values(), dtype=float, count=len(self._terms.quad))

    def store(self) -> "VarStore":
        for var in self._terms.linear:
            return var.store
        for pair in self._terms.quad:
            return pair.first.store
        raise ModelingError(f"Attempt to access the backend of constant expression {self}.")

    def infinity(self) -> float:
        if self.is_constant():
            return math.inf
        return self.store().infinity()

    def lb(self) -> float:
        if self.is_constant():
            return self._terms.constant

        inf = self.infinity()
        total = self._terms.constant
        for var, coeff in self._terms.linear.items():
            bound = _extended(var.lb() if coeff > 0 else var.ub(), inf)
            if math.isinf(bound):
                return -inf
            total += coeff * bound

        for pair, coeff in self._terms.quad.items():
            lo, hi = _product_range(pair, inf)
            bound = lo if coeff > 0 else hi
            if math.isinf(bound):
                return -inf
            total += coeff * bound
        return total

    def ub(self) -> float:
        return -(-self).lb()

    def numerical_range(self, ignore_inf_var_bounds: bool = False) -> tuple[float, float]:
        """Smallest and largest absolute value any single term can take.

        A term whose variable has an infinite bound has infinite amplitude unless
        ``ignore_inf_var_bounds`` is set, in which case only its coefficient
        counts. Zero amplitudes are skipped; an all-zero expression gives
        ``(0.0, 0.0)``.
        """
        inf = self.infinity()
        amplitudes: list[float] = []
        if self._terms.constant != 0:
            amplitudes.append(abs(self._terms.constant))

        for var, coeff in self._terms.linear.items():
            reach = max(abs(_extended(var.lb(), inf)), abs(_extended(var.ub(), inf)))
            amplitudes.append(self._amplitude(coeff, reach, ignore_inf_var_bounds))

        for pair, coeff in self._terms.quad.items():
            lo, hi = _product_range(pair, inf)
            amplitudes.append(self._amplitude(coeff, max(abs(lo), abs(hi)), ignore_inf_var_bounds))

        amplitudes = [a for a in amplitudes if a != 0]
        if not amplitudes:
            return 0.0, 0.0
        low, high = min(amplitudes), max(amplitudes)
        return (inf if math.isinf(low) else low), (inf if math.isinf(high) else high)

    @staticmethod
    def _amplitude(coeff: float, reach: float, ignore_inf: bool) -> float:
        if math.isinf(reach):
            return abs(coeff) if ignore_inf else math.inf
        return abs(coeff) * reach

    def must_be_binary(self) -> bool:
        terms = self._terms
        if self.is_constant():
            return terms.constant == 0 or terms.constant == 1

        if len(terms.linear) + len(terms.quad) > 1:
            return False

        if terms.linear:
            [(var, coeff)] = terms.linear.items()
            if var.type() != VarType.BINARY:
                return False
        else:
            [(pair, coeff)] = terms.quad.items()
            if pair.first.type() != VarType.BINARY or pair.second.type() != VarType.BINARY:
                return False

        if terms.constant == 1 and coeff == -1:
            return True
        return terms.constant == 0 and coeff == 1

    def is_integral(self) -> bool:
        """True if the expression can only take integer values."""
        terms = self._terms
        if not _is_integral(terms.constant):
            return False
        for var, coeff in terms.linear.items():
            if var.type() == VarType.CONTINUOUS or not _is_integral(coeff):
                return False
        for pair, coeff in terms.quad.items():
            if not _is_integral(coeff):
                return False
            if VarType.CONTINUOUS in (pair.first.type(), pair.second.type()):
                return False
        return True

    # Arithmetic

    def __neg__(self) -> "Expr":
        result = self.copy()
        result._terms.scale(-1.0)
        return result

    def __pos__(self) -> "Expr":
        return self.copy()

    def __iadd__(self, other: Operand) -> "Expr":
        if isinstance(other, Var):
            self._terms.add_var(other)
        elif isinstance(other, Expr):
            self._terms.add(other._terms)
        elif isinstance(other, Real):
            self._terms.add_constant(float(other))
        else:
            return NotImplemented
        return self

    def __isub__(self, other: Operand) -> "Expr":
        if isinstance(other, Var):
            self._terms.subtract_var(other)
        elif isinstance(other, Expr):
            self._terms.add((-other)._terms)
        elif isinstance(other, Real):
            self._terms.add_constant(-float(other))
        else:
            return NotImplemented
        return self

    def __imul__(self, other: Operand) -> "Expr":
        if isinstance(other, Var):
            self._terms.multiply_var(other)
        elif isinstance(other, Expr):
            self._terms.multiply(other._terms)
        elif isinstance(other, Real):
            self._terms.scale(float(other))
        else:
            return NotImplemented
        return self

    def __itruediv__(self, other: Operand) -> "Expr":
        if isinstance(other, Real):
            self._terms.divide(float(other))
            return self
        divisor = Expr.coerce(other)
        if divisor is None:
            return NotImplemented
        if not divisor.is_constant():
            raise NonConstantDivisorError(f"Attempt to divide by non-constant expression ({self}) / ({divisor}).")
        self._terms.divide(divisor.constant())
        return self

    def __add__(self, other: Operand) -> "Expr":
        result = self.copy()
        return result.__iadd__(other)

    def __radd__(self, other: Operand) -> "Expr":
        return self.__add__(other)

    def __sub__(self, other: Operand) -> "Expr":
        result = self.copy()
        return result.__isub__(other)

    def __rsub__(self, other: Operand) -> "Expr":
        return (-self).__add__(other)

    def __mul__(self, other: Operand) -> "Expr":
        result = self.copy()
        return result.__imul__(other)

    def __rmul__(self, other: Operand) -> "Expr":
        return self.__mul__(other)

    def __truediv__(self, other: Operand) -> "Expr":
        result = self.copy()
        return result.__itruediv__(other)

    def __rtruediv__(self, other: Operand) -> "Expr":
        numerator = Expr.coerce(other)
        if numerator is None:
            return NotImplemented
        return numerator.__truediv__(self)

    # Constraints

    def __le__(self, other: Operand) -> "Constr":
        from miplib.core.constr import ConstrType, relation

        rhs = Expr.coerce(other)
        if rhs is None:
            return NotImplemented
        return relation(self, rhs, ConstrType.LESS_EQUAL)

    def __ge__(self, other: Operand) -> "Constr":
        from miplib.core.constr import ConstrType, relation

        lhs = Expr.coerce(other)
        if lhs is None:
            return NotImplemented
        return relation(lhs, self, ConstrType.LESS_EQUAL)

    def __eq__(self, other: Operand) -> "Constr":  # type: ignore[override]
        from miplib.core.constr import ConstrType, relation

        rhs = Expr.coerce(other)
        if rhs is None:
            return NotImplemented
        return relation(self, rhs, ConstrType.EQUAL)

    def __invert__(self) -> "Constr":
        from miplib.core.constr import negation

        return negation(self)

    def __rshift__(self, other: "Constr") -> "IndicatorConstr":
        from miplib.core.constr import Constr, IndicatorConstr

        if not isinstance(other, Constr):
            return NotImplemented
        return IndicatorConstr(self == 1, other)

    def __str__(self) -> str:
        return format_terms(self._terms)

    def __repr__(self) -> str:
        return f"Expr({self})"
