"""Tests for tax rules loading and the TaxParameters schema.

Uses isolated config directories via tmp_path and NL_PAYROLL_CONFIG_PATH
so user rules on the machine running the tests are never read.
"""

import json
from datetime import date
from decimal import Decimal

import pytest
import yaml
from pydantic import ValidationError

from nlpayroll.sdk.taxes import (
    TaxParameters,
    TaxRulesNotFoundError,
    estimate_income_tax,
    find_tax_rules_file,
    list_tax_years,
    load_tax_parameters,
    load_tax_rules,
)
from nlpayroll.sdk.schemas import TaxTable


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Empty config directory with a tax-rules/ subdirectory."""
    config_dir = tmp_path / "config"
    rules_dir = config_dir / "tax-rules"
    rules_dir.mkdir(parents=True)
    monkeypatch.setenv("NL_PAYROLL_CONFIG_PATH", str(config_dir))
    return {"config_dir": config_dir, "rules_dir": rules_dir}


def write_rules(rules_dir, year, **overrides):
    """Write a user rules file based on the bundled one."""
    rules = load_tax_rules(2025)
    rules.pop("public_holidays", None)
    rules["tax_year"] = year
    rules.update(overrides)
    path = rules_dir / f"{year}.yaml"
    path.write_text(yaml.safe_dump(rules))
    return path


class TestBundledRules:
    """The 2025 rules shipped with the package."""

    def test_load_2025(self, isolated_config):
        params = load_tax_parameters(2025)

        assert params.tax_year == 2025
        assert params.aow_rate == Decimal("17.90")
        assert params.wlz_rate == Decimal("9.65")
        assert params.ww_rate == Decimal("0.27")
        assert params.wia_rate == Decimal("0.60")
        assert params.aow_max_base == Decimal("3203.42")
        assert params.ww_max_base == Decimal("5783.17")
        assert params.holiday_allowance_rate == Decimal("8.33")
        assert params.minimum_wage == Decimal("2223.20")
        assert date(2025, 12, 25) in params.public_holidays

    def test_employer_premiums_2025(self, isolated_config):
        params = load_tax_parameters(2025)

        assert params.employer_ww_rate == Decimal("2.70")
        assert (params.awf_rate_low, params.awf_rate_high) == (Decimal("2.74"), Decimal("7.74"))
        assert (params.aof_rate_low, params.aof_rate_high) == (Decimal("6.28"), Decimal("7.64"))
        assert params.employer_zvw_rate == Decimal("6.95")
        assert params.state_pension_age == 67

    def test_youth_rates_2025(self, isolated_config):
        params = load_tax_parameters(2025)

        assert list(params.youth_minimum_wage_rates) == [15, 16, 17, 18, 19, 20]
        assert params.youth_minimum_wage_rates[18] == Decimal("61.5")

    def test_list_years(self, isolated_config):
        assert 2025 in list_tax_years()

    def test_missing_year(self, isolated_config):
        assert find_tax_rules_file(1999) is None
        with pytest.raises(TaxRulesNotFoundError, match="1999"):
            load_tax_parameters(1999)

    def test_not_found_is_file_not_found(self):
        assert issubclass(TaxRulesNotFoundError, FileNotFoundError)


class TestUserRules:
    """Rules in the config directory override bundled rules."""

    def test_user_file_overrides_bundled(self, isolated_config):
        path = write_rules(isolated_config["rules_dir"], 2025, minimum_wage="2300.00")

        assert find_tax_rules_file(2025) == path
        assert load_tax_parameters(2025).minimum_wage == Decimal("2300.00")

    def test_new_year(self, isolated_config):
        write_rules(isolated_config["rules_dir"], 2026, aow_rate="18.00")

        assert list_tax_years() == [2025, 2026]
        assert load_tax_parameters(2026).aow_rate == Decimal("18.00")

    def test_custom_rules_dir_setting(self, isolated_config, tmp_path):
        custom = tmp_path / "shared-rules"
        custom.mkdir()
        write_rules(custom, 2027)
        (isolated_config["config_dir"] / "settings.json").write_text(
            json.dumps({"tax_rules_dir": str(custom)})
        )

        assert load_tax_parameters(2027).tax_year == 2027

    def test_tax_year_defaults_to_filename(self, isolated_config):
        rules = load_tax_rules(2025)
        rules.pop("tax_year")
        rules.pop("public_holidays")
        (isolated_config["rules_dir"] / "2028.yaml").write_text(yaml.safe_dump(rules))

        assert load_tax_parameters(2028).tax_year == 2028

    def test_tax_year_mismatch_rejected(self, isolated_config):
        write_rules(isolated_config["rules_dir"], 2026)
        path = isolated_config["rules_dir"] / "2026.yaml"
        path.rename(isolated_config["rules_dir"] / "2029.yaml")

        with pytest.raises(ValueError, match="declares tax_year 2026"):
            load_tax_parameters(2029)

    def test_invalid_rules_rejected(self, isolated_config):
        write_rules(isolated_config["rules_dir"], 2026, aow_max_base="0")

        with pytest.raises(ValidationError):
            load_tax_parameters(2026)


class TestTaxParametersSchema:
    """Tests for TaxParameters validation."""

    def test_unknown_field_rejected(self, isolated_config):
        rules = load_tax_rules(2025)
        rules["employer_rate"] = "5.00"
        with pytest.raises(ValidationError):
            TaxParameters.model_validate(rules)

    def test_holidays_must_fall_in_tax_year(self, isolated_config):
        rules = load_tax_rules(2025)
        rules["public_holidays"] = [date(2024, 12, 25)]
        with pytest.raises(ValidationError, match="outside tax year"):
            TaxParameters.model_validate(rules)

    def test_holidays_sorted_and_deduplicated(self, isolated_config):
        rules = load_tax_rules(2025)
        rules["public_holidays"] = [date(2025, 12, 25), date(2025, 1, 1), date(2025, 12, 25)]
        params = TaxParameters.model_validate(rules)
        assert params.public_holidays == [date(2025, 1, 1), date(2025, 12, 25)]

    def test_youth_rate_above_hundred_rejected(self, isolated_config):
        rules = load_tax_rules(2025)
        rules["youth_minimum_wage_rates"] = {18: "150"}
        with pytest.raises(ValidationError, match="youth_minimum_wage_rates"):
            TaxParameters.model_validate(rules)


class TestMinimumWageForAge:
    """Tests for TaxParameters.minimum_wage_for_age() and is_pension_age()."""

    @pytest.mark.parametrize("age, expected", [
        (None, Decimal("2223.20")),
        (14, None),
        (15, Decimal("878.164")),
        (18, Decimal("1367.268")),
        (20, Decimal("1889.72")),
        (21, Decimal("2223.20")),
        (45, Decimal("2223.20")),
    ])
    def test_minimum_by_age(self, isolated_config, age, expected):
        assert load_tax_parameters(2025).minimum_wage_for_age(age) == expected

    def test_without_youth_table_everyone_gets_adult_rate(self, isolated_config):
        params = load_tax_parameters(2025).model_copy(update={"youth_minimum_wage_rates": {}})
        assert params.minimum_wage_for_age(14) == Decimal("2223.20")

    def test_pension_age(self, isolated_config):
        params = load_tax_parameters(2025)

        assert params.is_pension_age(67) is True
        assert params.is_pension_age(66) is False
        assert params.is_pension_age(None) is False


class TestIncomeTaxEstimate:
    """Tests for estimate_income_tax()."""

    def test_first_bracket(self, isolated_config):
        params = load_tax_parameters(2025)
        # 3000 x 12 x 35.82% / 12
        assert estimate_income_tax(Decimal("3000.00"), params, TaxTable.STANDARD) == Decimal("1074.60")

    def test_second_bracket(self, isolated_config):
        params = load_tax_parameters(2025)
        # (76817 x 35.82% + (120000 - 76817) x 49.50%) / 12
        assert estimate_income_tax(Decimal("10000.00"), params, TaxTable.STANDARD) == Decimal("4074.29")

    def test_reduced_table_floor(self, isolated_config):
        params = load_tax_parameters(2025)
        assert estimate_income_tax(Decimal("500.00"), params, TaxTable.REDUCED) == Decimal("0")

    def test_zero_gross(self, isolated_config):
        params = load_tax_parameters(2025)
        assert estimate_income_tax(Decimal("0"), params, TaxTable.STANDARD) == Decimal("0")
