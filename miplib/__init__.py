"""miplib: solver-agnostic modeling of mixed integer linear/quadratic programs."""

from miplib.backends import BackendKind, CapabilitySet, LocalBackend, Sense
from miplib.config import IndicatorPolicy, Settings, load_settings, save_settings
from miplib.core import (
    Constr,
    ConstrType,
    Expr,
    IndicatorConstr,
    ModelingError,
    Var,
    VarType,
)
from miplib.solver import Solver
from miplib.version import __version__

__all__ = [
    "__version__",
    "BackendKind",
    "CapabilitySet",
    "Constr",
    "ConstrType",
    "Expr",
    "IndicatorConstr",
    "IndicatorPolicy",
    "LocalBackend",
    "ModelingError",
    "Sense",
    "Settings",
    "Solver",
    "Var",
    "VarType",
    "load_settings",
    "save_settings",
]
