"""Canonical polynomial of degree at most two over variable handles."""

from __future__ import annotations

from typing import TypeVar

from miplib.core.errors import CubicExpressionError, QuarticExpressionError
from miplib.core.var import Var, VarPair

K = TypeVar("K", Var, VarPair)


def _accumulate(terms: dict[K, float], key: K, coeff: float) -> None:
    # Coefficients that reach exactly zero are dropped.
    total = terms.get(key, 0.0) + coeff
    if total == 0:
        terms.pop(key, None)
    else:
        terms[key] = total


class TermMap:
    """Constant, linear and quadratic coefficients of an expression.

    Every mutating method works in place and keeps the map free of zero
    coefficients.
    """

    __slots__ = ("constant", "linear", "quad")

    def __init__(
        self,
        constant: float = 0.0,
        linear: dict[Var, float] | None = None,
        quad: dict[VarPair, float] | None = None,
    ) -> None:
        self.constant = float(constant)
        self.linear: dict[Var, float] = dict(linear) if linear else {}
        self.quad: dict[VarPair, float] = dict(quad) if quad else {}

    @classmethod
    def from_var(cls, var: Var) -> "TermMap":
        return cls(linear={var: 1.0})

    def copy(self) -> "TermMap":
        return TermMap(self.constant, self.linear, self.quad)

    def add_constant(self, c: float) -> None:
        self.constant += c

    def add_var(self, var: Var) -> None:
        _accumulate(self.linear, var, 1.0)

    def subtract_var(self, var: Var) -> None:
        _accumulate(self.linear, var, -1.0)

    def add(self, other: "TermMap") -> None:
        self.constant += other.constant
        for var, coeff in list(other.linear.items()):
            _accumulate(self.linear, var, coeff)
        for pair, coeff in list(other.quad.items()):
            _accumulate(self.quad, pair, coeff)

    def scale(self, c: float) -> None:
        if c == 0:
            self.constant = 0.0
            self.linear.clear()
            self.quad.clear()
            return
        for var in self.linear:
            self.linear[var] *= c
        for pair in self.quad:
            self.quad[pair] *= c
        self.constant *= c

    def multiply_var(self, var: Var) -> None:
        self.multiply(TermMap.from_var(var))

    def multiply(self, other: "TermMap") -> None:
        if other is self:
            other = self.copy()

        if self.quad and other.quad:
            raise QuarticExpressionError(f"Attempt to create quartic expression ({self}) * ({other}).")
        if (self.quad and other.linear) or (self.linear and other.quad):
            raise CubicExpressionError(f"Attempt to create cubic expression ({self}) * ({other}).")

        constant = self.constant
        linear = dict(self.linear)

        self.scale(other.constant)

        for var, coeff in other.linear.items():
            _accumulate(self.linear, var, constant * coeff)
        for pair, coeff in other.quad.items():
            _accumulate(self.quad, pair, constant * coeff)

        for v1, c1 in linear.items():
            for v2, c2 in other.linear.items():
                _accumulate(self.quad, VarPair(v1, v2), c1 * c2)

    def divide(self, c: float) -> None:
        self.scale(1 / c)

    def __str__(self) -> str:
        return format_terms(self)

    def __repr__(self) -> str:
        return f"TermMap({self})"


def _format_number(value: float) -> str:
    return f"{value:g}"


def format_terms(terms: TermMap) -> str:
    """Render terms sorted by variable id, e.g. ``3 x y - 2 z + 1``."""
    quad = sorted(
        ((pair.by_id(), coeff) for pair, coeff in terms.quad.items()),
        key=lambda item: (item[0][0].id, item[0][1].id),
    )
    linear = sorted(terms.linear.items(), key=lambda item: item[0].id)

    parts: list[str] = []

    def coefficient(c: float, is_constant: bool = False) -> str:
        first = not parts
        text = "" if first else " "
        if c < 0:
            text += "-"
        elif c > 0 and not first:
            text += "+"
        if not first:
            text += " "
        if is_constant:
            text += _format_number(abs(c))
        elif c != 1 and c != -1:
            text += _format_number(abs(c)) + " "
        return text

    for (v1, v2), c in quad:
        parts.append(f"{coefficient(c)}{v1.id} {v2.id}")
    for var, c in linear:
        parts.append(f"{coefficient(c)}{var.id}")

    if terms.constant != 0 or not parts:
        parts.append(coefficient(terms.constant, is_constant=True))
    return "".join(parts)
