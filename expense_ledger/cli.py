# expense_ledger/cli.py
import logging
import os
import click
import yaml
from dotenv import load_dotenv
from expense_ledger.config import load_config
from expense_ledger.core.errors import LedgerError
from expense_ledger.core.periods import FilterKind
from expense_ledger.core.validation import format_amount
from expense_ledger.outputs import get_output
from expense_ledger.screen import LedgerScreen

FILTER_CHOICE = click.Choice([kind.value for kind in FilterKind])


def _open_screen(ctx, filter_kind=None):
    kind = filter_kind or ctx.obj['cfg'].get('default_filter', 'all')
    try:
        kind = FilterKind(kind)
    except ValueError:
        choices = ", ".join(k.value for k in FilterKind)
        raise click.ClickException(
            f"Invalid default_filter {kind!r} in config (expected one of {choices})"
        )
    screen = LedgerScreen(ctx.obj['db_path'], kind)
    try:
        return screen.open()
    except LedgerError as e:
        raise click.ClickException(str(e))


def _echo_totals(screen):
    click.echo(f"Total ({screen.filter_kind.label}): {format_amount(screen.total)}")
    for item in screen.categories:
        click.echo(
            f"  {item['category']}: {format_amount(item['total'])}"
            f" ({item['transactions']})"
        )


@click.group()
@click.option(
    '--config', 'config_path',
    default='config.yaml',
    type=click.Path(dir_okay=False),
    help='Path to config.yaml (defaults are used when it does not exist)'
)
@click.option(
    '--env-file', 'env_file',
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help='Optional .env file with LEDGER_* settings'
)
@click.option(
    '--db', 'db_path',
    default=None,
    envvar='LEDGER_DB',
    type=click.Path(dir_okay=False),
    help='SQLite database file (overrides db_path from the config)'
)
@click.pass_context
def main(ctx, config_path, env_file, db_path):
    """
    Record expenses in a local SQLite ledger and review them by week,
    month or overall, with totals per category.
    """
    if env_file:
        load_dotenv(env_file)
        db_path = db_path or os.getenv('LEDGER_DB')

    try:
        cfg = load_config(config_path)
    except (ValueError, yaml.YAMLError) as e:
        raise click.ClickException(f"Could not read config {config_path}: {e}")
    level = str(os.getenv('LEDGER_LOG_LEVEL', cfg.get('log_level', 'WARNING'))).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise click.BadParameter(
            f"Unknown log level {level!r} (from LEDGER_LOG_LEVEL or log_level)",
            param_hint="log level",
        )
    logging.basicConfig(level=level)

    ctx.ensure_object(dict)
    ctx.obj['cfg'] = cfg
    ctx.obj['db_path'] = db_path or cfg.get('db_path')


@main.command()
@click.pass_context
def init(ctx):
    """Create the ledger database if it does not exist."""
    _open_screen(ctx)
    click.echo(f"Ledger ready at {ctx.obj['db_path']}.")


@main.command()
@click.argument('amount')
@click.argument('category')
@click.option('--note', default='', help='Optional note')
@click.pass_context
def add(ctx, amount, category, note):
    """Record an expense dated today."""
    screen = _open_screen(ctx)
    try:
        screen.submit(amount, category, note)
    except LedgerError as e:
        raise click.ClickException(str(e))
    click.echo(f"Added expense. {len(screen.expenses)} expense(s) listed.")


@main.command()
@click.argument('expense_id', type=int)
@click.option('--amount', default=None, help='New amount')
@click.option('--category', default=None, help='New category')
@click.option('--note', default=None, help='New note (pass "" to clear it)')
@click.pass_context
def edit(ctx, expense_id, amount, category, note):
    """Change the amount, category or note of an expense."""
    screen = _open_screen(ctx)
    try:
        draft = screen.start_edit(expense_id)
        screen.submit(
            draft.amount if amount is None else amount,
            draft.category if category is None else category,
            draft.note if note is None else note,
        )
    except LedgerError as e:
        raise click.ClickException(str(e))
    click.echo(f"Updated expense {expense_id}.")


@main.command()
@click.argument('expense_id', type=int)
@click.pass_context
def delete(ctx, expense_id):
    """Delete an expense. Unknown ids are ignored."""
    screen = _open_screen(ctx)
    screen.delete(expense_id)
    click.echo(f"Deleted expense {expense_id}.")


@main.command(name='list')
@click.option('--filter', 'filter_kind', default=None, type=FILTER_CHOICE,
              help='Time window: all, week or month')
@click.pass_context
def list_expenses(ctx, filter_kind):
    """List expenses, newest first, followed by totals."""
    screen = _open_screen(ctx, filter_kind)
    if not screen.expenses:
        click.echo("No expenses yet.")
        return
    for exp in screen.expenses:
        line = f"{exp.id:>5}  {exp.date.isoformat()}  {format_amount(exp.amount):>10}  {exp.category}"
        if exp.note:
            line += f"  ({exp.note})"
        click.echo(line)
    click.echo("")
    _echo_totals(screen)


@main.command()
@click.option('--filter', 'filter_kind', default=None, type=FILTER_CHOICE,
              help='Time window: all, week or month')
@click.pass_context
def totals(ctx, filter_kind):
    """Show the overall and per-category totals."""
    _echo_totals(_open_screen(ctx, filter_kind))


@main.command()
@click.option('--filter', 'filter_kind', default=None, type=FILTER_CHOICE,
              help='Time window: all, week or month')
@click.option(
    '--output', 'output_format',
    default='csv',
    type=click.Choice(['csv', 'excel']),
    help='Output target: csv or excel'
)
@click.pass_context
def export(ctx, filter_kind, output_format):
    """Write the filtered expenses to a CSV file or Excel workbook."""
    screen = _open_screen(ctx, filter_kind)
    try:
        outputter = get_output(output_format, ctx.obj['cfg'])
    except ValueError as e:
        raise click.ClickException(str(e))
    path = outputter.export(screen.expenses, label=screen.filter_kind.value)
    click.echo(f"Exported {len(screen.expenses)} expense(s) to {path}.")
