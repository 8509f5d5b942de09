"""Init command implementation."""

import typer

from relais.cli.session import open_session
from relais.config import get_default_folder_path
from relais.errors import RelaisError
from relais.ledger.criteria_sheet import CriteriaSheet
from relais.ledger.store import ResultLedger

app = typer.Typer(help="Create the search and results sheets")


@app.callback(invoke_without_command=True)
def init(ctx: typer.Context):
    """Create the search criteria and results sheets if they are missing."""
    try:
        session = open_session()

        criteria_sheet = CriteriaSheet(session.sheets, session.layout)
        ledger = ResultLedger(session.sheets, session.layout)

        created_criteria = criteria_sheet.initialize(
            folder_path=get_default_folder_path(session.config)
        )
        created_results = ledger.initialize()
    except RelaisError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    for name, created in (
        (criteria_sheet.sheet_name, created_criteria),
        (ledger.sheet_name, created_results),
    ):
        state = "Created" if created else "Already exists"
        typer.echo(f"{state}: sheet '{name}'")

    typer.echo()
    typer.echo(f"Fill in the '{criteria_sheet.sheet_name}' sheet, then run 'relais search'.")
