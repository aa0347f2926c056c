"""Tax rules loading.

Rules are stored one file per year (tax-rules/2025.yaml). User rules in the
config directory override the rules bundled with the package.
"""

import logging
from pathlib import Path
from typing import List, Optional

import yaml

from ..config import get_tax_rules_dirs
from .schemas import TaxParameters

logger = logging.getLogger(__name__)


class TaxRulesNotFoundError(FileNotFoundError):
    """Raised when no tax rules file exists for a year."""
    pass


def find_tax_rules_file(year: int) -> Optional[Path]:
    """Find the YAML file for a year, user directory first."""
    for rules_dir in get_tax_rules_dirs():
        config_file = rules_dir / f"{year}.yaml"
        if config_file.exists():
            return config_file
    return None


def list_tax_years() -> List[int]:
    """Get sorted list of available tax rule years (ascending)."""
    years = set()
    for rules_dir in get_tax_rules_dirs():
        if rules_dir.is_dir():
            years.update(int(p.stem) for p in rules_dir.glob("*.yaml") if p.stem.isdigit())
    return sorted(years)


def load_tax_rules(year: int) -> dict:
    """Load raw tax rules for a year from tax-rules/YYYY.yaml.

    Raises:
        TaxRulesNotFoundError: If no rules file exists for the year
    """
    config_file = find_tax_rules_file(int(year))
    if config_file is None:
        searched = ", ".join(str(d) for d in get_tax_rules_dirs())
        raise TaxRulesNotFoundError(f"Tax rules file not found for year {year} (searched: {searched})")

    logger.debug(f"Loading tax rules for {year} from {config_file}")
    with open(config_file, "r") as f:
        return yaml.safe_load(f) or {}


def load_tax_parameters(year: int) -> TaxParameters:
    """Load and validate the TaxParameters for a year.

    The file's tax_year defaults to the year in its filename; a file that
    declares a different year is rejected.

    Raises:
        TaxRulesNotFoundError: If no rules file exists for the year
        pydantic.ValidationError: If the file contents are invalid
    """
    rules = load_tax_rules(year)
    rules.setdefault("tax_year", int(year))
    if int(rules["tax_year"]) != int(year):
        raise ValueError(f"Tax rules file for {year} declares tax_year {rules['tax_year']}")
    return TaxParameters.model_validate(rules)
