from __future__ import annotations

import typer

from src.insights.cli import insights_app

app = typer.Typer(help="Spend Insights CLI")
app.add_typer(insights_app, name="insights")


if __name__ == "__main__":
    app()
