"""init-ci command: scaffold a GitHub Actions workflow that refreshes the report."""

from pathlib import Path

import typer

from . import app
from ._common import console

WORKFLOW_PATH = Path(".github") / "workflows" / "onboardx.yml"

WORKFLOW_TEMPLATE = """\
name: onboardx

on:
  push:
    branches-ignore:
      - "dependabot/**"

permissions:
  contents: write

jobs:
  onboard:
    runs-on: ubuntu-latest
    steps:
      - uses: actions/checkout@v4
        with:
          fetch-depth: 0

      - uses: actions/setup-python@v5
        with:
          python-version: "3.12"

      - name: Install onboardx
        run: pip install onboardx

      - name: Generate {output}
        run: onboardx --out {output} --diagrams

      - name: Commit refreshed report
        run: |
          git config user.name "github-actions[bot]"
          git config user.email "github-actions[bot]@users.noreply.github.com"
          git add {output}
          git diff --cached --quiet || git commit -m "docs: refresh {output} [skip ci]"
          git push
"""


def render_workflow(output: str = "ONBOARD.md") -> str:
    return WORKFLOW_TEMPLATE.format(output=output)


@app.command("init-ci")
def init_ci(
    path: Path = typer.Argument(
        Path("."),
        help="Repository root that receives the workflow",
        exists=True,
        file_okay=False,
        dir_okay=True,
    ),
    out: str = typer.Option(
        "ONBOARD.md",
        "-o",
        "--out",
        help="Report file the workflow regenerates",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite an existing workflow file",
    ),
):
    """
    Write a GitHub Actions workflow that regenerates the report on every push.

    [bold cyan]Examples:[/bold cyan]

      onboardx init-ci

      onboardx init-ci /path/to/repo --force
    """
    workflow = path / WORKFLOW_PATH

    if workflow.exists() and not force:
        console.print(
            f"[yellow]{workflow} already exists.[/yellow] Use --force to overwrite it."
        )
        raise typer.Exit(1)

    try:
        workflow.parent.mkdir(parents=True, exist_ok=True)
        workflow.write_text(render_workflow(out), encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Error:[/red] cannot write {workflow}: {e}")
        raise typer.Exit(1)

    console.print(f"Workflow written to: [bold green]{workflow}[/bold green]")
