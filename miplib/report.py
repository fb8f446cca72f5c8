"""Rich tables describing a recorded model."""

from __future__ import annotations

import math

from rich.console import Console
from rich.table import Table

from miplib.backends.local import LocalBackend


def _bound(value: float, inf: float) -> str:
    if value >= inf or math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value <= -inf:
        return "-inf"
    return f"{value:g}"


def variables_table(backend: LocalBackend) -> Table:
    inf = backend.infinity()
    table = Table(title="Variables")
    table.add_column("#", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Type")
    table.add_column("Lower", justify="right")
    table.add_column("Upper", justify="right")
    for slot in range(backend.num_vars()):
        record = backend.var_record(slot)
        table.add_row(
            str(slot),
            record.name or f"_x{slot}",
            record.vartype.value,
            _bound(record.lb, inf),
            _bound(record.ub, inf),
        )
    return table


def constraints_table(backend: LocalBackend) -> Table:
    table = Table(title="Constraints")
    table.add_column("Name", style="green")
    table.add_column("Kind")
    table.add_column("Constraint", style="white")
    for constr in backend.constraints:
        kind = "linear" if constr.is_linear() else "quadratic"
        table.add_row(constr.name or "", kind, str(constr))
    for constr in backend.indicator_constraints:
        table.add_row(constr.name or "", "indicator", str(constr))
    return table


def model_tables(backend: LocalBackend) -> list[Table]:
    return [variables_table(backend), constraints_table(backend)]


def print_model(backend: LocalBackend, console: Console | None = None) -> None:
    console = console or Console()
    if backend.objective is not None:
        sense, expr = backend.objective
        console.print(f"[bold]{sense.value}[/bold] {expr}")
    for table in model_tables(backend):
        console.print(table)
