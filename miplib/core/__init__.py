from miplib.core.constr import Constr, ConstrType, IndicatorConstr
from miplib.core.errors import (
    BackendUnavailableError,
    CubicExpressionError,
    DegreeError,
    MalformedConstraintError,
    ModelingError,
    NonConstantDivisorError,
    QuarticExpressionError,
    ReformulationError,
    ReificationError,
    ScalingError,
    UnsupportedConstraintError,
)
from miplib.core.expr import Expr
from miplib.core.terms import TermMap
from miplib.core.var import Var, VarPair, VarType

__all__ = [
    "BackendUnavailableError",
    "Constr",
    "ConstrType",
    "CubicExpressionError",
    "DegreeError",
    "Expr",
    "IndicatorConstr",
    "MalformedConstraintError",
    "ModelingError",
    "NonConstantDivisorError",
    "QuarticExpressionError",
    "ReformulationError",
    "ReificationError",
    "ScalingError",
    "TermMap",
    "UnsupportedConstraintError",
    "Var",
    "VarPair",
    "VarType",
]
