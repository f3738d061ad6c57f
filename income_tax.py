"""Personal income tax under the new regime (FY 2025-26).

Brackets are expressed as a list like:
    [TaxBracket(start=0, end=400000, rate=0.0), ...]

Salary is reduced by the standard deduction, zeroed entirely when the
remaining taxable income is within the rebate threshold, and otherwise taxed
bracket by bracket before the health & education cess is added on top.
"""
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple


@dataclass(frozen=True)
class TaxBracket:
    start: float
    end: Optional[float]  # None means no upper bound
    rate: float           # e.g., 0.15 for 15%


def compute_tax(taxable_income: float, brackets: Sequence[TaxBracket]) -> float:
    """Compute tax owed under progressive brackets.

    Args:
        taxable_income: income subject to the slabs (>=0).
        brackets: ordered low-to-high sequence of TaxBracket.

    Returns:
        Slab tax before cess.
    """
    if taxable_income <= 0:
        return 0.0

    tax = 0.0
    for b in brackets:
        lower = b.start
        upper = float('inf') if b.end is None else b.end
        if taxable_income <= lower:
            break
        amount_in_bracket = min(taxable_income, upper) - lower
        if amount_in_bracket > 0:
            tax += amount_in_bracket * b.rate
    return tax


DEFAULT_BRACKETS: Tuple[TaxBracket, ...] = (
    TaxBracket(start=0, end=400000, rate=0.0),
    TaxBracket(start=400000, end=800000, rate=0.05),
    TaxBracket(start=800000, end=1200000, rate=0.10),
    TaxBracket(start=1200000, end=1600000, rate=0.15),
    TaxBracket(start=1600000, end=2000000, rate=0.20),
    TaxBracket(start=2000000, end=2400000, rate=0.25),
    TaxBracket(start=2400000, end=None, rate=0.30),
)


@dataclass(frozen=True)
class PersonalTaxRules:
    standard_deduction: float = 75000.0
    rebate_threshold: float = 1200000.0
    cess_rate: float = 0.04
    brackets: Tuple[TaxBracket, ...] = DEFAULT_BRACKETS

    def __post_init__(self):
        if not self.brackets:
            raise ValueError("tax schedule needs at least one bracket")
        if self.brackets[0].start != 0:
            raise ValueError("tax schedule must start at 0")
        if self.brackets[-1].end is not None:
            raise ValueError("last bracket must be unbounded")
        for prev, nxt in zip(self.brackets, self.brackets[1:]):
            if prev.end is None or prev.end != nxt.start or prev.end <= prev.start:
                raise ValueError(
                    f"brackets not contiguous at {prev.start}-{prev.end} / {nxt.start}"
                )

    @property
    def tax_free_ceiling(self) -> float:
        """Highest gross salary that still pays no tax."""
        return self.standard_deduction + self.rebate_threshold


DEFAULT_RULES = PersonalTaxRules()


def taxable_income(gross_income: float, rules: PersonalTaxRules = DEFAULT_RULES) -> float:
    return max(0.0, max(0.0, gross_income) - rules.standard_deduction)


def compute_personal_tax(gross_income: float, rules: PersonalTaxRules = DEFAULT_RULES) -> float:
    """Tax liability on a gross salary, cess included.

    Income at or below the rebate threshold owes nothing at all; one rupee
    above it owes the full slab tax (no marginal relief).
    """
    taxable = taxable_income(gross_income, rules)
    if taxable <= rules.rebate_threshold:
        return 0.0
    return compute_tax(taxable, rules.brackets) * (1.0 + rules.cess_rate)
