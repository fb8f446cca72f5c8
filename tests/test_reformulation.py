import pytest

from miplib.backends.local import LocalBackend
from miplib.core.errors import ReformulationError
from miplib.core.var import Var, VarType


@pytest.fixture
def z(backend: LocalBackend) -> Var:
    return Var(backend, VarType.BINARY, name="z")


@pytest.fixture
def z12(backend: LocalBackend) -> tuple[Var, Var]:
    return Var(backend, VarType.BINARY, name="z1"), Var(backend, VarType.BINARY, name="z2")


def test_unbounded_implicand_has_no_reformulation(backend: LocalBackend, z: Var) -> None:
    x = Var(backend, VarType.INTEGER, name="x")
    ic = z >> (x <= 0)

    assert not ic.has_reformulation()
    with pytest.raises(ReformulationError, match="Try bounding the domain"):
        ic.reformulation()


def test_unbounded_above_has_no_reformulation(backend: LocalBackend, z: Var) -> None:
    x = Var(backend, VarType.INTEGER, -1, None, "x")
    assert not (z >> (x <= 0)).has_reformulation()


def test_equality_unbounded_below_has_no_reformulation(backend: LocalBackend, z: Var) -> None:
    x = Var(backend, VarType.INTEGER, None, 1, "x")
    ic = z >> (x == 0)

    assert not ic.has_reformulation()
    with pytest.raises(ReformulationError, match="no finite lower bound"):
        ic.reformulation()


def test_inequality(backend: LocalBackend, z: Var) -> None:
    x = Var(backend, VarType.INTEGER, None, 2, "x")

    for ic in (z >> (x <= 0), (z == 1) >> (x <= 0)):
        assert ic.has_reformulation()
        assert [str(c) for c in ic.reformulation()] == ["x + 2 z - 2 <= 0"]


def test_negated_inequality(backend: LocalBackend, z: Var) -> None:
    x = Var(backend, VarType.INTEGER, None, 2, "x")
    ic = ~z >> (x <= 0)

    assert ic.has_reformulation()
    assert [str(c) for c in ic.reformulation()] == ["x - 2 z <= 0"]


def test_equality(backend: LocalBackend, z: Var) -> None:
    x = Var(backend, VarType.INTEGER, 2, 4, "x")
    ic = z >> (x == 3)

    assert ic.has_reformulation()
    assert [str(c) for c in ic.reformulation()] == ["x + z - 4 <= 0", "-x + z + 2 <= 0"]


def test_equality_with_one_side_implied(backend: LocalBackend, z: Var) -> None:
    x = Var(backend, VarType.INTEGER, 2, 4, "x")
    ic = z >> (x == 2)

    assert ic.has_reformulation()
    assert [str(c) for c in ic.reformulation()] == ["x + 2 z - 4 <= 0"]


def test_implicand_implied_by_bounds_needs_nothing(backend: LocalBackend, z: Var) -> None:
    x = Var(backend, VarType.INTEGER, 0, 2, "x")
    assert (z >> (x <= 5)).reformulation() == []


def test_non_reifiable_implicant(backend: LocalBackend, z12: tuple[Var, Var]) -> None:
    z1, z2 = z12
    x = Var(backend, VarType.INTEGER, None, 1, "x")
    y = Var(backend, VarType.INTEGER, 0, 1, "y")

    assert not ((z1 - z2) >> (x == 0)).has_reformulation()
    assert not ((z1 - z2 == 0) >> (y <= 0)).has_reformulation()
    with pytest.raises(ReformulationError, match="not reifiable"):
        ((z1 - z2 == 0) >> (y <= 0)).reformulation()


def test_non_unary_implicant(backend: LocalBackend, z12: tuple[Var, Var]) -> None:
    z1, z2 = z12
    x = Var(backend, VarType.INTEGER, None, 2, "x")

    for ic in ((z1 + z2 == 2) >> (x <= 0), (-z1 - z2 == -2) >> (x <= 0)):
        assert ic.has_reformulation()
        assert [str(c) for c in ic.reformulation()] == ["x + 2 z1 + 2 z2 - 4 <= 0"]


def test_non_unary_implicant_equality(backend: LocalBackend, z12: tuple[Var, Var]) -> None:
    z1, z2 = z12
    x = Var(backend, VarType.INTEGER, 2, 4, "x")
    ic = (z1 + z2 == 2) >> (x == 3)

    assert ic.has_reformulation()
    assert [str(c) for c in ic.reformulation()] == ["x + z1 + z2 - 5 <= 0", "-x + z1 + z2 + 1 <= 0"]


def test_quadratic_implicant(backend: LocalBackend, z12: tuple[Var, Var]) -> None:
    z1, z2 = z12
    x = Var(backend, VarType.INTEGER, None, 2, "x")
    ic = (z1 * z2 == 1) >> (x <= 0)

    assert not ic.has_reformulation()
    with pytest.raises(ReformulationError, match="not reifiable"):
        ic.reformulation()


def test_scaled_reformulation(backend: LocalBackend, z: Var) -> None:
    x = Var(backend, VarType.CONTINUOUS, 0, 1e6, "x")
    [c] = ((z == 1) >> (x <= 0)).scale()

    assert c.expr.numerical_range() == (1953.125, 1953.125)
