"""Typed errors raised while building or transforming a model."""

from __future__ import annotations


class ModelingError(ValueError):
    """Base class for modeling mistakes the caller has to fix."""


class DegreeError(ModelingError):
    """Multiplication would produce a term of degree higher than two."""


class CubicExpressionError(DegreeError):
    pass


class QuarticExpressionError(DegreeError):
    pass


class MalformedConstraintError(ModelingError):
    pass


class ReificationError(ModelingError):
    pass


class ReformulationError(ModelingError):
    pass


class NonConstantDivisorError(ModelingError):
    pass


class ScalingError(ModelingError):
    pass


class UnsupportedConstraintError(ModelingError):
    """A backend cannot post the given constraint shape."""


class BackendUnavailableError(RuntimeError):
    pass
