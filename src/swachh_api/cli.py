"""SwachhBuddy auth service CLI using Typer.

This module provides command-line utilities for the auth service,
including secret generation for deployment configuration and a
development server.
"""

import secrets

import typer
import uvicorn
from rich.console import Console

from swachh_config import get_settings

app = typer.Typer(
    name="swachh-auth",
    help="SwachhBuddy Auth Service CLI",
    no_args_is_help=True,
)
console = Console()


secrets_app = typer.Typer(
    name="secrets",
    help="Secret generation utilities",
    no_args_is_help=True,
)
app.add_typer(secrets_app)


@secrets_app.command("generate")
def generate_secrets() -> None:
    """Generate secure secrets for the auth service configuration.

    Generates the two required signing secrets:
    - JWT_ACCESS_SECRET: signs access tokens
    - JWT_REFRESH_SECRET: signs refresh tokens

    Copy the output to your .env file.
    """
    console.print("\n[bold green]SwachhBuddy Secret Generation[/bold green]")
    console.print("=" * 60)
    console.print(
        "\nGenerated secrets for your [bold].env[/bold] configuration file:\n"
    )

    # 64 bytes of entropy each, independent of one another
    console.print(
        f"[cyan]JWT_ACCESS_SECRET[/cyan]={secrets.token_urlsafe(64)}",
        soft_wrap=True,
    )
    console.print(
        f"[cyan]JWT_REFRESH_SECRET[/cyan]={secrets.token_urlsafe(64)}",
        soft_wrap=True,
    )

    console.print("\n" + "=" * 60)
    console.print(
        "[yellow]Keep these secrets secure and never commit them "
        "to version control![/yellow]"
    )
    console.print(
        "[dim]Copy the above values to your config/.env (Docker) or "
        "config/.env.dev (local) file.[/dim]\n"
    )


@app.command("serve")
def serve(
    host: str = typer.Option(None, help="Bind address (default: API_HOST)"),
    port: int = typer.Option(None, help="Port (default: API_PORT)"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the API under uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "swachh_api.app:create_app",
        factory=True,
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
