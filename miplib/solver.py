"""Solver facade: posts constraints to a backend, reformulating when needed."""

from __future__ import annotations

import logging

from miplib.backends.base import Backend, BackendKind, Sense, is_native_indicator
from miplib.backends.discovery import create_backend
from miplib.config import IndicatorPolicy, Settings, load_settings
from miplib.core.constr import Constr, IndicatorConstr
from miplib.core.expr import Expr
from miplib.core.ir import IRModel
from miplib.core.var import Var, VarType
from miplib.transform.scale import scale_gm

logger = logging.getLogger(__name__)


class Solver:
    """Model under construction on one backend.

    ``backend`` is either a :class:`BackendKind` resolved through the backend
    registry or an already constructed backend instance.
    """

    def __init__(
        self,
        backend: BackendKind | Backend | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or load_settings()
        if backend is None:
            backend = self.settings.backend
        if isinstance(backend, (BackendKind, str)):
            backend = create_backend(BackendKind(backend))
        self._backend: Backend = backend
        self._indicator_policy = self.settings.indicator_policy

    @property
    def backend(self) -> Backend:
        return self._backend

    @property
    def indicator_policy(self) -> IndicatorPolicy:
        return self._indicator_policy

    def set_indicator_constraint_policy(self, policy: IndicatorPolicy) -> None:
        self._indicator_policy = IndicatorPolicy(policy)

    def infinity(self) -> float:
        return self._backend.infinity()

    def supports_indicator_constraints(self) -> bool:
        return self._backend.capabilities().indicator_constraints

    def supports_quadratic_constraints(self) -> bool:
        return self._backend.capabilities().quadratic_constraints

    def supports_quadratic_objective(self) -> bool:
        return self._backend.capabilities().quadratic_objective

    def add_var(
        self,
        vartype: VarType = VarType.CONTINUOUS,
        lb: float | None = None,
        ub: float | None = None,
        name: str | None = None,
    ) -> Var:
        return Var(self._backend, vartype, lb, ub, name)

    def add(self, constr: Constr | IndicatorConstr) -> None:
        if isinstance(constr, IndicatorConstr):
            self._add_indicator(constr)
        elif isinstance(constr, Constr):
            self._add_constr(constr)
        else:
            raise TypeError(f"cannot add {type(constr).__name__} to a model")

    def _add_constr(self, constr: Constr) -> None:
        if self.settings.scale_constraints:
            scaled = scale_gm(
                constr,
                skip_lb=self.settings.scale_skip_lb,
                skip_ub=self.settings.scale_skip_ub,
                ignore_inf_var_bounds=self.settings.ignore_inf_var_bounds,
                amplitude_warning=self.settings.amplitude_warning,
            )
            if scaled is not constr:
                logger.debug("Scaled %s to %s", constr, scaled)
            constr = scaled
        self._backend.add_constr(constr)

    def _add_indicator(self, constr: IndicatorConstr) -> None:
        reformulate = (
            self._indicator_policy == IndicatorPolicy.REFORMULATE
            or self.settings.scale_constraints
            or (
                self._indicator_policy == IndicatorPolicy.REFORMULATE_IF_UNSUPPORTED
                and not (self.supports_indicator_constraints() and is_native_indicator(constr))
            )
        )
        if not reformulate:
            self._backend.add_indicator_constr(constr)
            return

        pieces = constr.reformulation()
        logger.debug("Reformulated %s into %d constraint(s)", constr, len(pieces))
        for piece in pieces:
            self._add_constr(piece)

    def set_objective(self, sense: Sense, expr: Expr | Var | float) -> None:
        self._backend.set_objective(Sense(sense), Expr(expr))

    def maximize(self, expr: Expr | Var | float) -> None:
        self.set_objective(Sense.MAXIMIZE, expr)

    def minimize(self, expr: Expr | Var | float) -> None:
        self.set_objective(Sense.MINIMIZE, expr)

    def to_ir(self) -> IRModel:
        to_ir = getattr(self._backend, "to_ir", None)
        if to_ir is None:
            raise TypeError(f"backend '{self._backend.kind.value}' cannot export a model snapshot")
        return to_ir()
