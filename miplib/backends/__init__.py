from miplib.backends.base import Backend, BackendKind, CapabilitySet, Sense, VarStore
from miplib.backends.discovery import (
    available_backends,
    backend_is_available,
    create_backend,
    register_backend,
    unregister_backend,
)
from miplib.backends.local import LocalBackend

__all__ = [
    "Backend",
    "BackendKind",
    "CapabilitySet",
    "LocalBackend",
    "Sense",
    "VarStore",
    "available_backends",
    "backend_is_available",
    "create_backend",
    "register_backend",
    "unregister_backend",
]
