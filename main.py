import subprocess
import sys
from typing import Optional

import typer
from rich.console import Console

from api import SCRIPT_BODY
from config import settings
from ui_helpers import set_output_mode, print_routes_result

console = Console()

ROUTES = [
    {"method": "GET", "path": "/books", "success": "200 list envelope, cacheable", "failure": ""},
    {"method": "GET", "path": "/books/{id}", "success": "200 book envelope", "failure": "404 empty body"},
    {"method": "POST", "path": "/books", "success": "201 book envelope", "failure": ""},
    {"method": "PUT", "path": "/books/{id}", "success": "200 book envelope", "failure": "404 empty body"},
    {"method": "DELETE", "path": "/books/{id}", "success": "204 empty body", "failure": "404 empty body"},
    {"method": "GET", "path": "/script", "success": "200 application/javascript", "failure": ""},
    {"method": "GET", "path": "/health", "success": "200 status and book count", "failure": ""},
]

# --- Typer CLI application ---
app = typer.Typer(help="Books REST API CLI")

@app.callback()
def _global_options(
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format: plain | json | rich (default: plain)",
    )
):
    """Global CLI options (e.g. output mode)."""
    if output:
        set_output_mode(output)

@app.command("routes")
def cli_routes():
    """Show the HTTP surface served by the API."""
    print_routes_result(ROUTES)

@app.command("script")
def cli_script():
    """Print the code-on-demand snippet served at /script."""
    print(SCRIPT_BODY)

@app.command("serve")
def cli_serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default from API_HOST)"),
    port: Optional[int] = typer.Option(None, "--port", help="Listen port (default from API_PORT)"),
    reload: bool = typer.Option(False, "--reload", help="Restart the server on code changes"),
):
    """Start the API with Uvicorn."""
    host = host or settings.api_host
    port = int(port or settings.api_port)
    print(f"Starting API on http://{host}:{port}/")
    args = [
        sys.executable,
        "-m", "uvicorn",
        "api:app",
        "--host", host,
        "--port", str(port),
        "--log-level", settings.log_level.lower(),
    ]
    if reload:
        args.append("--reload")
    try:
        subprocess.run(args)
    except FileNotFoundError:
        console.print("[bold red]Error:[/] `uvicorn` could not be found. Make sure it is installed in your environment.")
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
