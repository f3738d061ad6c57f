"""
Unit tests for the personal income tax calculator.

Covers the slab walk, the rebate cliff and the schedule checks.
"""

import pytest

from income_tax import (
    DEFAULT_BRACKETS,
    DEFAULT_RULES,
    PersonalTaxRules,
    TaxBracket,
    compute_personal_tax,
    compute_tax,
    taxable_income,
)


class TestComputeTax:
    """Slab walk without deduction, rebate or cess."""

    def test_zero_and_negative_income(self):
        assert compute_tax(0, DEFAULT_BRACKETS) == 0.0
        assert compute_tax(-5000, DEFAULT_BRACKETS) == 0.0

    def test_first_slab_is_nil(self):
        assert compute_tax(400000, DEFAULT_BRACKETS) == 0.0

    def test_partial_second_slab(self):
        assert compute_tax(500000, DEFAULT_BRACKETS) == pytest.approx(5000.0)

    def test_all_slabs(self):
        # 20k + 40k + 60k + 80k + 100k + 30% of 525k
        assert compute_tax(2925000, DEFAULT_BRACKETS) == pytest.approx(457500.0)

    def test_rate_is_not_retroactive(self):
        # Crossing into 15% only taxes the rupees above 12L at 15%
        below = compute_tax(1200000, DEFAULT_BRACKETS)
        above = compute_tax(1200100, DEFAULT_BRACKETS)
        assert above - below == pytest.approx(15.0)


class TestPersonalTax:
    """Deduction, rebate threshold and cess on top of the slabs."""

    def test_taxable_income_floors_at_zero(self):
        assert taxable_income(50000) == 0.0
        assert taxable_income(-1) == 0.0
        assert taxable_income(1200000) == 1125000.0

    def test_negative_gross_is_clamped(self):
        assert compute_personal_tax(-1_000_000) == 0.0

    @pytest.mark.parametrize("gross", [0, 75000, 600000, 1200000, 1274999, 1275000])
    def test_zero_up_to_tax_free_ceiling(self, gross):
        assert compute_personal_tax(gross) == 0.0

    def test_tax_free_ceiling(self):
        assert DEFAULT_RULES.tax_free_ceiling == 1275000.0

    def test_rebate_cliff_is_sharp(self):
        at = compute_personal_tax(1275000)
        just_above = compute_personal_tax(1275001)
        assert at == 0.0
        # One rupee more owes the full slab tax on 12L plus cess
        assert just_above == pytest.approx((20000 + 40000 + 0.15) * 1.04)
        assert just_above > 60000

    def test_above_rebate_matches_slab_walk(self):
        gross = 1500000
        expected = compute_tax(gross - 75000, DEFAULT_BRACKETS) * 1.04
        assert compute_personal_tax(gross) == pytest.approx(expected)

    def test_top_bracket_with_cess(self):
        assert compute_personal_tax(3000000) == pytest.approx(475800.0)

    def test_monotonic(self):
        previous = 0.0
        for gross in range(0, 4_000_001, 5_000):
            tax = compute_personal_tax(gross)
            assert tax >= previous
            previous = tax

    def test_deterministic(self):
        assert compute_personal_tax(2222222) == compute_personal_tax(2222222)

    def test_custom_rules(self):
        rules = PersonalTaxRules(standard_deduction=0, rebate_threshold=0, cess_rate=0.0)
        assert compute_personal_tax(500000, rules) == pytest.approx(5000.0)


class TestScheduleValidation:
    """Malformed schedules are configuration errors."""

    def test_default_schedule_is_valid(self):
        PersonalTaxRules()

    def test_gap_raises(self):
        brackets = (
            TaxBracket(0, 100, 0.0),
            TaxBracket(200, None, 0.1),
        )
        with pytest.raises(ValueError, match="contiguous"):
            PersonalTaxRules(brackets=brackets)

    def test_bounded_last_bracket_raises(self):
        with pytest.raises(ValueError, match="unbounded"):
            PersonalTaxRules(brackets=(TaxBracket(0, 100, 0.0),))

    def test_nonzero_start_raises(self):
        with pytest.raises(ValueError, match="start at 0"):
            PersonalTaxRules(brackets=(TaxBracket(10, None, 0.1),))

    def test_empty_raises(self):
        with pytest.raises(ValueError):
            PersonalTaxRules(brackets=())
