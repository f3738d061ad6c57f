"""Grid search over headcount x salary per head.

The matrix depends only on revenue and expenses. Changing the current
headcount or salary moves the highlighted cell, it does not require a new
sweep. Every call recomputes the whole lattice.
"""

from dataclasses import dataclass, replace

from logging_config import setup_logger, timed
from scenario import ScenarioInputs, evaluate

logger = setup_logger(__name__)

SALARY_STEPS: tuple[float, ...] = (
    0.0, 600000.0, 900000.0, 1200000.0, 1500000.0, 1800000.0, 2400000.0, 3000000.0,
)
HEADCOUNT_RANGE: tuple[int, ...] = (1, 2, 3, 4, 5, 6)

FLAT_RATIO = 0.5


@dataclass(frozen=True)
class HeatTone:
    tone: str  # "low" or "high"
    opacity: float


def heat_tone(ratio: float) -> HeatTone:
    """Two-tone intensity; both ends of the scale get more opaque."""
    ratio = min(1.0, max(0.0, ratio))
    if ratio < 0.5:
        return HeatTone("low", 0.1 + (1.0 - ratio) * 0.4)
    return HeatTone("high", 0.1 + ratio * 0.5)


@dataclass(frozen=True)
class SweepCell:
    headcount: int
    salary_per_head: float
    total_retained: float
    ratio: float

    @property
    def tone(self) -> HeatTone:
        return heat_tone(self.ratio)


@dataclass(frozen=True)
class SweepMatrix:
    headcounts: tuple[int, ...]
    salary_steps: tuple[float, ...]
    rows: tuple[tuple[SweepCell, ...], ...]
    minimum: float
    maximum: float

    @property
    def shape(self) -> tuple[int, int]:
        return len(self.headcounts), len(self.salary_steps)

    def cells(self) -> list[SweepCell]:
        return [c for row in self.rows for c in row]

    def cell(self, headcount: int, salary_per_head: float) -> SweepCell:
        try:
            i = self.headcounts.index(headcount)
            j = self.salary_steps.index(salary_per_head)
        except ValueError:
            raise KeyError((headcount, salary_per_head)) from None
        return self.rows[i][j]

    def is_current(self, cell: SweepCell, inputs: ScenarioInputs) -> bool:
        return (
            cell.headcount == inputs.headcount
            and cell.salary_per_head == inputs.salary_per_head
        )

    def best(self) -> SweepCell:
        """Highest retained value; first in row-major order on ties."""
        best = None
        for c in self.cells():
            if best is None or c.total_retained > best.total_retained:
                best = c
        return best

    def to_dataframe(self):
        try:
            import pandas as pd
        except Exception:
            raise RuntimeError("pandas is required to build a DataFrame output")
        df = pd.DataFrame(
            [[c.total_retained for c in row] for row in self.rows],
            index=pd.Index(self.headcounts, name="members"),
            columns=pd.Index(self.salary_steps, name="salary_per_head"),
        )
        return df


def normalize(values: list[float]) -> list[float]:
    """Scale values into [0, 1]; a flat input maps everything to 0.5."""
    if not values:
        return []
    lo, hi = min(values), max(values)
    if hi == lo:
        logger.debug(f"flat range at {lo}, using ratio {FLAT_RATIO}")
        return [FLAT_RATIO] * len(values)
    span = hi - lo
    return [(v - lo) / span for v in values]


def sweep(
    revenue: float,
    fixed_expenses: float,
    flexible_expenses: float,
    headcounts=HEADCOUNT_RANGE,
    salary_steps=SALARY_STEPS,
    **overrides,
) -> SweepMatrix:
    """Evaluate every (headcount, salary) pair and rank the outcomes.

    Args:
        revenue, fixed_expenses, flexible_expenses: held fixed across the grid.
        headcounts: ordered row values (positive ints).
        salary_steps: ordered column values.
        **overrides: extra ScenarioInputs fields (corporate_tax_rate, tax_rules).

    Returns:
        SweepMatrix with one cell per pair, rows by headcount.
    """
    headcounts = tuple(headcounts)
    salary_steps = tuple(float(s) for s in salary_steps)
    base = ScenarioInputs(
        revenue=revenue,
        fixed_expenses=fixed_expenses,
        flexible_expenses=flexible_expenses,
        headcount=headcounts[0] if headcounts else 1,
        salary_per_head=0.0,
        **overrides,
    )

    with timed(logger, f"sweep {len(headcounts)}x{len(salary_steps)}"):
        values = [
            [
                evaluate(replace(base, headcount=m, salary_per_head=s)).total_retained
                for s in salary_steps
            ]
            for m in headcounts
        ]

        flat = [v for row in values for v in row]
        ratios = iter(normalize(flat))
        rows = tuple(
            tuple(
                SweepCell(headcount=m, salary_per_head=s, total_retained=v, ratio=next(ratios))
                for s, v in zip(salary_steps, row)
            )
            for m, row in zip(headcounts, values)
        )

    return SweepMatrix(
        headcounts=headcounts,
        salary_steps=salary_steps,
        rows=rows,
        minimum=min(flat) if flat else 0.0,
        maximum=max(flat) if flat else 0.0,
    )
