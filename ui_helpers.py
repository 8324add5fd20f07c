import os
import json
from typing import List, Dict
from rich.console import Console
from rich.table import Table

# Environment variable controlling CLI output mode
# Allowed values: 'plain' (default), 'json', 'rich'
OUTPUT_MODE_ENV = "BOOKS_CLI_OUTPUT"

_console = Console()

def set_output_mode(mode: str) -> None:
    mode = (mode or "").lower().strip()
    if mode in {"plain", "json", "rich"}:
        os.environ[OUTPUT_MODE_ENV] = mode

def get_output_mode() -> str:
    return os.environ.get(OUTPUT_MODE_ENV, "plain").lower()

def print_routes_result(routes: List[Dict[str, str]]) -> None:
    """Print the HTTP surface according to the current output mode.
    - plain: 'METHOD PATH -> success' lines
    - json: JSON array of the route rows
    - rich: Rich table
    """
    mode = get_output_mode()

    if mode == "json":
        print(json.dumps(routes, ensure_ascii=False))
    elif mode == "rich":
        table = Table(title="Routes", show_lines=True, header_style="bold cyan")
        table.add_column("Method", style="magenta", no_wrap=True)
        table.add_column("Path", style="white")
        table.add_column("Success", style="green")
        table.add_column("Failure", style="red")
        for r in routes:
            table.add_row(r["method"], r["path"], r["success"], r["failure"] or "-")
        _console.print(table)
    else:
        for r in routes:
            line = f"{r['method']} {r['path']} -> {r['success']}"
            if r["failure"]:
                line += f" | {r['failure']}"
            print(line)
