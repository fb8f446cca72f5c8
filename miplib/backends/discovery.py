"""Registry of backend factories.

Only the in-memory backend ships with the package. Engine adapters register
themselves with :func:`register_backend`.
"""

from __future__ import annotations

from collections.abc import Callable

from miplib.backends.base import Backend, BackendKind
from miplib.core.errors import BackendUnavailableError

BackendFactory = Callable[[], Backend]

_ANY_PREFERENCE = (BackendKind.GUROBI, BackendKind.SCIP, BackendKind.LPSOLVE, BackendKind.LOCAL)

_BACKEND_FACTORIES: dict[BackendKind, BackendFactory] = {}
_BUILTINS_REGISTERED = False


def register_backend(kind: BackendKind, factory: BackendFactory) -> None:
    if kind == BackendKind.ANY:
        raise ValueError("cannot register a factory for the 'any' backend")
    _BACKEND_FACTORIES[BackendKind(kind)] = factory


def unregister_backend(kind: BackendKind) -> None:
    _BACKEND_FACTORIES.pop(BackendKind(kind), None)


def _register_builtin_backends() -> None:
    global _BUILTINS_REGISTERED
    if _BUILTINS_REGISTERED:
        return

    from miplib.backends.local import LocalBackend

    _BACKEND_FACTORIES.setdefault(BackendKind.LOCAL, LocalBackend)
    _BUILTINS_REGISTERED = True


def available_backends() -> list[BackendKind]:
    _register_builtin_backends()
    return [kind for kind in _ANY_PREFERENCE if kind in _BACKEND_FACTORIES]


def backend_is_available(kind: BackendKind) -> bool:
    kind = BackendKind(kind)
    if kind == BackendKind.ANY:
        return bool(available_backends())
    return kind in available_backends()


def create_backend(kind: BackendKind = BackendKind.ANY) -> Backend:
    kind = BackendKind(kind)
    available = available_backends()
    if kind == BackendKind.ANY:
        if not available:
            raise BackendUnavailableError("No backends are registered.")
        kind = available[0]
    elif kind not in available:
        raise BackendUnavailableError(f"Request for {kind.value} backend but it is not available.")
    return _BACKEND_FACTORIES[kind]()
