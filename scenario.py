"""Single-scenario evaluation: company profit vs. family salaries.

For one choice of revenue, expenses, number of family members on payroll and
salary per member, works out what the family keeps after both layers of tax:

- Salaries are a deductible expense for the company.
- Profit before tax = max(revenue - expenses - salaries, 0); losses earn no credit.
- Company tax is a flat effective rate (25.168%, surcharge and cess included).
- Each member's salary is taxed under the personal rules in income_tax.
- Retained = company profit after tax + all members' net salaries.

Negative money amounts are clamped to zero. Headcount is assumed to be a
positive integer already.
"""

from dataclasses import asdict, dataclass

from income_tax import DEFAULT_RULES, PersonalTaxRules, compute_personal_tax
from logging_config import setup_logger

logger = setup_logger(__name__)

COMPANY_TAX_RATE = 0.25168


@dataclass(frozen=True)
class ScenarioInputs:
    revenue: float
    fixed_expenses: float
    flexible_expenses: float
    headcount: int
    salary_per_head: float
    corporate_tax_rate: float = COMPANY_TAX_RATE

    tax_rules: PersonalTaxRules | None = None


@dataclass(frozen=True)
class ScenarioResult:
    pre_tax_profit: float
    corporate_tax: float
    post_tax_profit: float
    personal_tax_per_head: float
    net_salary_per_head: float
    total_family_net_salary: float
    total_retained: float
    efficiency_ratio: float  # retained / revenue, 0 when revenue is 0
    total_salary_outflow: float
    total_expenses: float
    total_personal_tax: float

    @property
    def efficiency_pct(self) -> float:
        return self.efficiency_ratio * 100.0


@dataclass(frozen=True)
class Advice:
    kind: str  # "tip" or "insight"
    message: str
    tax_free_ceiling: float


def _non_negative(name: str, value: float) -> float:
    if value < 0:
        logger.debug(f"clamping negative {name}={value} to 0")
        return 0.0
    return float(value)


def evaluate(inputs: ScenarioInputs) -> ScenarioResult:
    rules = inputs.tax_rules or DEFAULT_RULES

    revenue = _non_negative("revenue", inputs.revenue)
    fixed = _non_negative("fixed_expenses", inputs.fixed_expenses)
    flexible = _non_negative("flexible_expenses", inputs.flexible_expenses)
    salary = _non_negative("salary_per_head", inputs.salary_per_head)
    n = inputs.headcount

    # Company side
    salary_outflow = n * salary
    expenses = fixed + flexible + salary_outflow
    pbt = max(0.0, revenue - expenses)
    company_tax = pbt * inputs.corporate_tax_rate
    pat = pbt - company_tax

    # Family side
    ind_tax = compute_personal_tax(salary, rules)
    net_salary = salary - ind_tax
    family_net = n * net_salary

    retained = pat + family_net
    efficiency = retained / revenue if revenue > 0 else 0.0

    return ScenarioResult(
        pre_tax_profit=pbt,
        corporate_tax=company_tax,
        post_tax_profit=pat,
        personal_tax_per_head=ind_tax,
        net_salary_per_head=net_salary,
        total_family_net_salary=family_net,
        total_retained=retained,
        efficiency_ratio=efficiency,
        total_salary_outflow=salary_outflow,
        total_expenses=expenses,
        total_personal_tax=n * ind_tax,
    )


def advise(inputs: ScenarioInputs) -> Advice:
    """Compare the per-member salary with the zero-tax ceiling."""
    ceiling = (inputs.tax_rules or DEFAULT_RULES).tax_free_ceiling
    if inputs.salary_per_head > ceiling:
        return Advice(
            kind="tip",
            message=(
                "Salary per member is above the zero-tax ceiling. Adding more "
                "family members at lower salaries might increase overall retention."
            ),
            tax_free_ceiling=ceiling,
        )
    return Advice(
        kind="insight",
        message="Salaries use the tax-free individual threshold effectively.",
        tax_free_ceiling=ceiling,
    )


def breakdown(inputs: ScenarioInputs, result: ScenarioResult) -> dict[str, float]:
    """Split revenue into expenses, tax leakage and family wealth."""
    return {
        "expenses": max(0.0, inputs.fixed_expenses) + max(0.0, inputs.flexible_expenses),
        "tax_leakage": result.corporate_tax + result.total_personal_tax,
        "family_wealth": result.total_retained,
    }


def to_dataframe(results: list[ScenarioResult]):
    try:
        import pandas as pd
    except Exception:
        raise RuntimeError("pandas is required to build a DataFrame output")
    rows = []
    for r in results:
        row = asdict(r)
        row["efficiency_pct"] = r.efficiency_pct
        rows.append(row)
    return pd.DataFrame(rows)
