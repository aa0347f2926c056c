"""Rich renderer for payroll breakdowns.

Transforms SDK JSON output into formatted Rich tables.
"""

from decimal import Decimal

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box


def render_breakdown(console: Console, data: dict) -> None:
    """Render a payroll breakdown as Rich tables.

    Args:
        console: Rich Console instance
        data: PayrollBreakdown.model_dump(mode="json")
    """
    # Findings first
    for finding in data.get("compliance_findings", []):
        if finding.get("severity") == "info":
            console.print(Panel(finding["message"], title="Note", border_style="dim"))
        else:
            console.print(Panel(
                f"[yellow]{finding['message']}[/yellow]",
                title="Warning",
                border_style="yellow"
            ))

    _render_proration(console, data.get("proration", {}))
    _render_breakdown_table(console, data)


def _render_proration(console: Console, proration: dict) -> None:
    """Render pro-rata panel, only when the period was pro-rated."""
    if not proration.get("is_prorated"):
        return

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("key", style="dim")
    table.add_column("value")
    table.add_row("Method", proration.get("method", "?"))
    table.add_row("Days employed", f"{proration.get('working_days')} of {proration.get('total_days')}")
    table.add_row("Factor", f"{Decimal(proration.get('factor', 0)):.4f}")
    table.add_row("Full salary", _fmt(proration.get("full_salary")))
    table.add_row("Adjustment", f"[cyan]-{_fmt(proration.get('adjustment'))}[/cyan]")

    console.print(Panel(table, title="Pro-rata", border_style="dim"))


def _render_breakdown_table(console: Console, data: dict) -> None:
    """Render main gross-to-net table."""
    start = data.get("period_start", "?")
    end = data.get("period_end", "?")

    table = Table(
        title=f"Payroll Breakdown: {start} to {end} ({data.get('tax_year', '?')})",
        box=box.ROUNDED,
    )
    table.add_column("", style="bold", min_width=28)
    table.add_column("Amount", justify="right", min_width=12)

    # Earnings
    table.add_row("[bold]EARNINGS[/bold]", "")
    table.add_row("  Regular Pay", _fmt(data.get("regular_pay")))
    if Decimal(data.get("overtime_pay", "0")) != 0:
        table.add_row("  Overtime Pay", _fmt(data.get("overtime_pay")))
    table.add_row("  Holiday Allowance", _fmt(data.get("holiday_allowance")))
    table.add_row("  [dim]Gross Pay[/dim]", f"[dim]{_fmt(data.get('gross_pay'))}[/dim]")
    table.add_row("", "")

    # Contributions
    table.add_row("[bold]SOCIAL SECURITY[/bold]", "")
    table.add_row("  AOW", _fmt(data.get("aow_contribution")))
    table.add_row("  Wlz", _fmt(data.get("wlz_contribution")))
    table.add_row("  WW", _fmt(data.get("ww_contribution")))
    table.add_row("  WIA", _fmt(data.get("wia_contribution")))
    table.add_row("  [dim]Total Contributions[/dim]", f"[dim]{_fmt(data.get('total_contributions'))}[/dim]")
    table.add_row("", "")

    # Net pay
    table.add_row(
        "[bold green]NET PAY[/bold green]",
        f"[bold green]{_fmt(data.get('net_pay'))}[/bold green]",
    )
    table.add_row(
        "Income Tax (estimate)",
        _fmt(data.get("income_tax_estimate")),
        style="dim",
    )

    employer = data.get("employer_contributions")
    if employer:
        table.add_row("", "")
        table.add_row("[bold]EMPLOYER COSTS[/bold]", "")
        for key, label in (
            ("aow", "AOW"), ("wlz", "Wlz"), ("ww", "WW"), ("wia", "WIA"),
            ("awf", "AWF"), ("aof", "AOF"), ("zvw", "Zvw"),
        ):
            table.add_row(f"  {label}", _fmt(employer.get(key)))
        table.add_row("  [dim]Total Employer Premiums[/dim]", f"[dim]{_fmt(employer.get('total'))}[/dim]")
        table.add_row("Employer Cost", _fmt(data.get("employer_cost")))

    console.print(table)
    console.print(f"[dim]Net pay is {data.get('net_pay_basis', '')}.[/dim]")


def _fmt(amount) -> str:
    """Format euro amount. Accepts Decimal or the string form from model_dump."""
    if amount is None:
        return "-"
    return f"€{Decimal(str(amount)):,.2f}"
