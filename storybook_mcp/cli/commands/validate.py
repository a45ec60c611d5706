"""validate-tools command: check a custom tools JSON file before deploying it."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ...errors import CustomToolValidationError
from ...models import CustomToolDefinition
from ...models.custom_tool import REQUIRED_STRING_FIELDS
from ..utils import console as default_console


@dataclass
class ToolCheck:
    """Outcome of checking one definition."""

    index: int
    name: str
    definition: Optional[CustomToolDefinition] = None
    error: Optional[str] = None
    missing: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return self.definition is not None


def check_tool(index: int, item: Any) -> ToolCheck:
    """Validate one definition and collect advisory warnings."""
    name = item.get("name") if isinstance(item, dict) else None
    check = ToolCheck(index=index, name=str(name or "unnamed"))

    if isinstance(item, dict):
        check.missing = [
            f for f in REQUIRED_STRING_FIELDS
            if not isinstance(item.get(f), str) or not item.get(f).strip()
        ]

    try:
        check.definition = CustomToolDefinition.from_dict(item)
    except CustomToolValidationError as e:
        check.error = str(e)
        return check

    handler = check.definition.handler
    if "try" not in handler or "catch" not in handler:
        check.warnings.append("handler should include try/catch for clearer errors")
    return check


def env_line(definitions: List[CustomToolDefinition]) -> str:
    """CUSTOM_TOOLS="..." line for an MCP client configuration."""
    payload = [
        {
            "name": d.name,
            "description": d.description,
            "parameters": d.parameters,
            "page": d.page,
            "handler": d.handler,
        }
        for d in definitions
    ]
    encoded = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    return 'CUSTOM_TOOLS="' + encoded.replace('"', '\\"') + '"'


def validate_tools_file(path: str, console: Optional[Console] = None) -> int:
    """Validate a JSON array of custom tools and print a report.

    Returns:
        Process exit code: 0 when the file was readable JSON, 1 otherwise
    """
    console = console or default_console
    tools_file = Path(path)

    if not tools_file.exists():
        console.print(f"[red]✗ File not found: {tools_file}[/red]")
        return 1

    try:
        data = json.loads(tools_file.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        console.print(f"[red]✗ Invalid JSON: {escape(str(e))}[/red]")
        return 1

    if not isinstance(data, list):
        console.print("[red]✗ Expected a JSON array of custom tools[/red]")
        return 1

    console.print(
        Panel.fit(
            f"[bold blue]Custom Tools Validation[/bold blue]\n"
            f"{len(data)} definition(s) in {tools_file}",
            border_style="blue",
        )
    )

    checks = [check_tool(i, item) for i, item in enumerate(data)]

    table = Table(title="Custom Tools")
    table.add_column("#", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Status")
    table.add_column("Details")

    for check in checks:
        if check.valid:
            params = len(check.definition.parameters)
            details = [f"{params} parameter(s)" if params else "no parameters"]
            details.extend(f"⚠ {w}" for w in check.warnings)
            status = "[green]✓ valid[/green]"
        else:
            details = [check.error or "invalid"]
            if len(check.missing) > 1:
                details.append(f"missing: {', '.join(check.missing)}")
            status = "[red]✗ invalid[/red]"
        table.add_row(
            str(check.index + 1), escape(check.name), status, escape("\n".join(details))
        )

    console.print(table)

    valid = [c.definition for c in checks if c.valid]
    console.print(f"\n[bold]{len(valid)}/{len(checks)} tool(s) valid[/bold]")
    if valid:
        console.print("\nEnvironment variable format:")
        console.print(env_line(valid), markup=False, highlight=False, soft_wrap=True)
    return 0


@click.command(name="validate-tools")
@click.argument("file", type=click.Path(dir_okay=False))
@click.pass_context
def validate_tools(ctx, file):
    """Validate a JSON file of custom tool definitions.

    \b
    Reports for each definition:
      • whether it would be loaded by the server
      • missing required fields
      • handlers without try/catch
    and prints the CUSTOM_TOOLS line for the valid ones.
    """
    ctx.exit(validate_tools_file(file))
