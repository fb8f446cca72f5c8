import numpy as np
import pytest

from miplib.backends.local import LocalBackend
from miplib.core.errors import (
    CubicExpressionError,
    DegreeError,
    ModelingError,
    NonConstantDivisorError,
    QuarticExpressionError,
)
from miplib.core.expr import Expr
from miplib.core.var import Var, VarType


@pytest.fixture
def v(backend: LocalBackend) -> tuple[Var, Var, Var]:
    return (
        Var(backend, VarType.BINARY, name="v1"),
        Var(backend, VarType.BINARY, name="v2"),
        Var(backend, VarType.CONTINUOUS, name="v3"),
    )


def test_canonical_rendering(v: tuple[Var, Var, Var]) -> None:
    v1, v2, v3 = v

    assert str(Expr(3)) == "3"
    assert str(Expr()) == "0"
    assert str(-v1) == "-v1"
    assert str(v1 - v2) == "v1 - v2"
    assert str(2 * v1 - v2) == "2 v1 - v2"
    assert str(2 * (v1 - v2)) == "2 v1 - 2 v2"
    assert str(2 * (v1 - v2) + v1) == "3 v1 - 2 v2"
    assert str(2 * (v1 - v2) - 2 * v1) == "-2 v2"
    assert str(2 * (v1 - v2) / 2) == "v1 - v2"
    assert str(0.5 * v1 + 1.5) == "0.5 v1 + 1.5"
    assert str(v1 * v2) == "v1 v2"
    assert str(v2 * v1) == "v1 v2"


def test_products_coalesce_symmetric_terms(v: tuple[Var, Var, Var]) -> None:
    v1, v2, v3 = v

    assert str((v1 + v2) * (v2 + v3)) == "v1 v2 + v1 v3 + v2 v2 + v2 v3"
    assert str((v1 + v2) * (v1 - v2)) == "v1 v1 - v2 v2"
    assert str((1 * v1 + 2 * v2) * (3 * v2 + 4 * v3)) == "3 v1 v2 + 4 v1 v3 + 6 v2 v2 + 8 v2 v3"
    assert str((v1 + 2) * (v2 - 3)) == "v1 v2 - 3 v1 + 2 v2 - 6"


def test_cancellation_leaves_constant_zero(v: tuple[Var, Var, Var]) -> None:
    v1, v2, _ = v
    e = 2 * v1 - 2 * v1

    assert e.is_constant()
    assert e.constant() == 0
    assert e.arity() == 0
    assert str(e) == "0"
    assert (v1 * v2 - v2 * v1).is_constant()


def test_multiplying_by_zero_clears_everything(v: tuple[Var, Var, Var]) -> None:
    v1, v2, _ = v
    e = (v1 * v2 + v1 + 7) * 0

    assert e.is_constant()
    assert e.constant() == 0


def test_product_of_linear_expressions_is_quadratic(v: tuple[Var, Var, Var]) -> None:
    v1, v2, v3 = v
    e1 = v1 + 2 * v2
    e2 = v2 - v3 + 1
    product = e1 * e2

    assert e1.is_linear() and e2.is_linear()
    assert product.is_quadratic()
    assert product.arity() <= e1.arity() + e2.arity()
    assert [x.id for x in product.vars()] == ["v1", "v2", "v3"]


def test_degree_violations(v: tuple[Var, Var, Var]) -> None:
    v1, v2, v3 = v

    with pytest.raises(CubicExpressionError):
        v1 * v2 * v3
    with pytest.raises(CubicExpressionError):
        (v1 + 2) * (v2 + 2) * v3
    with pytest.raises(CubicExpressionError):
        v3 * (v1 * v2)
    with pytest.raises(QuarticExpressionError):
        (v1 * v1) * (v2 * v2)
    with pytest.raises(DegreeError):
        v1 * v1 * v1 * v1


def test_in_place_square(v: tuple[Var, Var, Var]) -> None:
    v1, v2, _ = v
    e = v1 + v2
    e *= e

    assert str(e) == "v1 v1 + 2 v1 v2 + v2 v2"


def test_derived_expressions_are_independent(v: tuple[Var, Var, Var]) -> None:
    v1, v2, v3 = v
    source = v1 + 1
    copied = Expr(source)
    derived = source + v2

    copied += v3
    derived *= 2
    source -= v1

    assert str(copied) == "v1 + v3 + 1"
    assert str(derived) == "2 v1 + 2 v2 + 2"
    assert str(source) == "1"


def test_division(v: tuple[Var, Var, Var]) -> None:
    v1, v2, _ = v

    assert str(v1 / 4) == "0.25 v1"
    assert str((2 * v1) / Expr(2)) == "v1"
    assert str(Expr(3) / Expr(2)) == "1.5"

    with pytest.raises(NonConstantDivisorError):
        v1 / (v2 + 1)
    with pytest.raises(NonConstantDivisorError):
        1 / v1


def test_coefficient_accessors(v: tuple[Var, Var, Var]) -> None:
    v1, v2, v3 = v
    e = 3 * v1 * v2 - v3 + 2 * v1 + 4

    assert e.constant() == 4
    assert [x.id for x in e.linear_vars()] == ["v3", "v1"]
    np.testing.assert_allclose(e.linear_coeffs(), [-1.0, 2.0])
    assert [x.id for x in e.quad_vars_1()] == ["v1"]
    assert [x.id for x in e.quad_vars_2()] == ["v2"]
    np.testing.assert_allclose(e.quad_coeffs(), [3.0])


def test_constant_expression_has_no_backend() -> None:
    with pytest.raises(ModelingError):
        Expr(5).store()


def test_must_be_binary(backend: LocalBackend, v: tuple[Var, Var, Var]) -> None:
    v1, v2, v3 = v
    n = Var(backend, VarType.INTEGER, 0, 1, "n")

    assert Expr(0).must_be_binary()
    assert Expr(1).must_be_binary()
    assert not Expr(2).must_be_binary()
    assert Expr(v1).must_be_binary()
    assert (1 - v1).must_be_binary()
    assert (v1 * v2).must_be_binary()
    assert (1 - v1 * v2).must_be_binary()
    assert not (2 * v1).must_be_binary()
    assert not (v1 + 1).must_be_binary()
    assert not (v1 + v2).must_be_binary()
    assert not Expr(v3).must_be_binary()
    assert not Expr(n).must_be_binary()
    assert not (v1 * v3).must_be_binary()


def test_is_integral(backend: LocalBackend, v: tuple[Var, Var, Var]) -> None:
    v1, v2, v3 = v
    n = Var(backend, VarType.INTEGER, name="n")

    assert (2 * v1 - 3 * n + 1).is_integral()
    assert (v1 * n).is_integral()
    assert not (0.5 * v1).is_integral()
    assert not (v1 + 0.5).is_integral()
    assert not (v1 + v3).is_integral()
