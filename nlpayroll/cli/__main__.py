"""nl-payroll CLI - Command-line interface for Dutch gross-to-net payroll."""

import logging
import os

import click

from nlpayroll import __version__

from .calc_commands import calc as calc_command
from .rules_commands import rules as rules_group
from .settings_commands import settings as settings_group

# Configure logging based on LOG_LEVEL environment variable
_log_level = os.environ.get("LOG_LEVEL", "WARNING").upper()
logging.basicConfig(
    level=getattr(logging, _log_level, logging.WARNING),
    format="%(asctime)s.%(msecs)03d %(levelname)s: %(message)s",
    datefmt="%H:%M:%S"
)


@click.group()
@click.version_option(version=__version__, prog_name="nl-payroll")
def cli():
    """nl-payroll - Dutch payroll gross-to-net calculator.

    Calculates gross pay, social-security contributions and net pay for
    one employee and one pay period.

    Configuration is loaded from (in order):

    \b
    1. NL_PAYROLL_CONFIG_PATH environment variable
    2. ~/.config/nl-payroll/settings.json (XDG default)

    Tax rules are read from the user tax-rules directory first, then from
    the rules bundled with the package. Run 'nl-payroll rules list' to see
    which years are available.
    """
    pass


# Add subcommands
cli.add_command(calc_command)
cli.add_command(rules_group)
cli.add_command(settings_group)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
