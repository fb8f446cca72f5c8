"""Decision variable handles."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Iterator

if TYPE_CHECKING:
    from miplib.backends.base import VarStore
    from miplib.core.expr import Expr


class VarType(str, Enum):
    CONTINUOUS = "continuous"
    BINARY = "binary"
    INTEGER = "integer"


def _expr(var: "Var") -> "Expr":
    from miplib.core.expr import Expr

    return Expr(var)


class Var:
    """Non-owning reference to a variable stored by a backend.

    Identity, hashing and ordering are defined over the arena slot the backend
    assigned when the variable was created. Two variables with the same type and
    bounds are still distinct.
    """

    __slots__ = ("_store", "_slot")

    def __init__(
        self,
        store: "VarStore",
        vartype: VarType = VarType.CONTINUOUS,
        lb: float | None = None,
        ub: float | None = None,
        name: str | None = None,
    ) -> None:
        self._store = store
        self._slot = store.create_var(VarType(vartype), lb, ub, name)

    @property
    def store(self) -> "VarStore":
        return self._store

    @property
    def index(self) -> int:
        return self._slot

    @property
    def name(self) -> str | None:
        return self._store.var_name(self._slot)

    @property
    def id(self) -> str:
        name = self.name
        if name is not None:
            return name
        return f"_x{self._slot}"

    def type(self) -> VarType:
        return self._store.var_type(self._slot)

    def lb(self) -> float:
        return self._store.var_lb(self._slot)

    def ub(self) -> float:
        return self._store.var_ub(self._slot)

    def set_lb(self, value: float) -> None:
        self._store.set_var_lb(self._slot, value)

    def set_ub(self, value: float) -> None:
        self._store.set_var_ub(self._slot, value)

    def set_type(self, vartype: VarType) -> None:
        self._store.set_var_type(self._slot, VarType(vartype))

    def set_name(self, name: str | None) -> None:
        self._store.set_var_name(self._slot, name)

    def is_same(self, other: "Var") -> bool:
        return self._store is other._store and self._slot == other._slot

    def is_lex_less(self, other: "Var") -> bool:
        return self._order_key() < other._order_key()

    def _order_key(self) -> tuple[int, int]:
        return (self._slot, id(self._store))

    def __hash__(self) -> int:
        return hash((id(self._store), self._slot))

    # A handle is never duplicated: copies alias the same variable.
    def __copy__(self) -> "Var":
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> "Var":
        return self

    def __str__(self) -> str:
        return self.id

    def __repr__(self) -> str:
        return f"Var({self.id!r}, {self.type().value})"

    def __neg__(self) -> "Expr":
        return -_expr(self)

    def __pos__(self) -> "Expr":
        return _expr(self)

    def __add__(self, other: Any) -> Any:
        return _expr(self) + other

    def __radd__(self, other: Any) -> Any:
        return other + _expr(self)

    def __sub__(self, other: Any) -> Any:
        return _expr(self) - other

    def __rsub__(self, other: Any) -> Any:
        return other - _expr(self)

    def __mul__(self, other: Any) -> Any:
        return _expr(self) * other

    def __rmul__(self, other: Any) -> Any:
        return other * _expr(self)

    def __truediv__(self, other: Any) -> Any:
        return _expr(self) / other

    def __rtruediv__(self, other: Any) -> Any:
        return other / _expr(self)

    def __le__(self, other: Any) -> Any:
        return _expr(self) <= other

    def __ge__(self, other: Any) -> Any:
        return _expr(self) >= other

    def __eq__(self, other: Any) -> Any:  # type: ignore[override]
        return _expr(self) == other

    def __invert__(self) -> Any:
        return ~_expr(self)

    def __rshift__(self, other: Any) -> Any:
        return _expr(self) >> other


class VarPair:
    """Unordered pair of variables used as a quadratic term key.

    The constructor puts the pair in canonical order, so ``VarPair(x, y)`` and
    ``VarPair(y, x)`` are the same key.
    """

    __slots__ = ("first", "second")

    def __init__(self, v1: Var, v2: Var) -> None:
        if v2.is_lex_less(v1):
            v1, v2 = v2, v1
        self.first = v1
        self.second = v2

    def is_square(self) -> bool:
        return self.first.is_same(self.second)

    def by_id(self) -> tuple[Var, Var]:
        if self.second.id < self.first.id:
            return self.second, self.first
        return self.first, self.second

    def __iter__(self) -> Iterator[Var]:
        yield self.first
        yield self.second

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VarPair):
            return NotImplemented
        return self.first.is_same(other.first) and self.second.is_same(other.second)

    def __hash__(self) -> int:
        return hash((self.first, self.second))

    def __repr__(self) -> str:
        return f"VarPair({self.first.id!r}, {self.second.id!r})"
