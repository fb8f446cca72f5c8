import math

import pytest

from miplib.backends.local import LocalBackend


@pytest.fixture(params=[math.inf, 1e20], ids=["inf", "finite-inf"])
def backend(request: pytest.FixtureRequest) -> LocalBackend:
    return LocalBackend(infinity=request.param)
