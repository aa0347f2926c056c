"""Settings CLI commands for nl-payroll.

Manages settings.json - tax rules directory, default pro-rata method.
"""

import click

from nlpayroll.sdk import (
    SettingsError,
    get_settings_path,
    get_user_tax_rules_dir,
    load_settings,
    set_setting,
    unset_setting,
)
from nlpayroll.sdk.config import KNOWN_SETTINGS


@click.group()
def settings():
    """Manage settings (settings.json).

    Available settings:
    - tax_rules_dir: directory holding YYYY.yaml tax rules
    - prorata_method: default pro-rata method for 'calc' (calendar/working)
    """
    pass


@settings.command("show")
def settings_show():
    """Show current settings and their values."""
    settings_path = get_settings_path()
    try:
        current = load_settings()
    except SettingsError as e:
        raise click.ClickException(str(e))

    click.echo(f"Settings file: {settings_path}")
    click.echo(f"File exists: {settings_path.exists()}")
    click.echo()

    if not current:
        click.echo("No settings configured (using defaults).")
    else:
        click.echo("Current settings:")
        for key, value in current.items():
            click.echo(f"  {key}: {value}")

    click.echo()
    click.echo("Effective values:")
    click.echo(f"  tax_rules_dir: {get_user_tax_rules_dir()}")
    click.echo(f"  prorata_method: {current.get('prorata_method', 'calendar')}")


@settings.command("set")
@click.argument("key", type=click.Choice(sorted(KNOWN_SETTINGS)))
@click.argument("value")
def settings_set(key: str, value: str):
    """Set KEY to VALUE in settings.json.

    \b
    Examples:
        nl-payroll settings set prorata_method working
        nl-payroll settings set tax_rules_dir ~/payroll/tax-rules
    """
    try:
        path = set_setting(key, value)
    except SettingsError as e:
        raise click.ClickException(str(e))

    click.echo(f"Set {key}: {value}")
    click.echo(f"Saved to: {path}")


@settings.command("unset")
@click.argument("key")
def settings_unset(key: str):
    """Remove KEY from settings.json, reverting to the default."""
    try:
        removed = unset_setting(key)
    except SettingsError as e:
        raise click.ClickException(str(e))

    if removed:
        click.echo(f"Cleared {key} setting.")
    else:
        click.echo(f"{key} was not set.")
