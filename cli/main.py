import asyncio

import typer
import uvicorn

from huddle.app.config import settings

app = typer.Typer(help="Huddle - team messaging with an AI assistant")


@app.command()
def start(reload: bool = typer.Option(False, help="Reload on code changes")) -> None:
    """Start the Huddle server."""
    typer.echo(f"Starting Huddle on {settings.host}:{settings.port}...")
    uvicorn.run(
        "huddle.app.main:app",
        host=settings.host,
        port=settings.port,
        reload=reload,
    )


@app.command("init-db")
def init_db() -> None:
    """Create the database tables."""
    from huddle.app.db import init_db as _init_db

    asyncio.run(_init_db())
    typer.echo(f"Database ready at {settings.database_url}")


@app.command("issue-token")
def issue_token(auth_id: str) -> None:
    """Mint a development bearer token for AUTH_ID."""
    from huddle.app.auth import issue_token as _issue_token

    typer.echo(_issue_token(auth_id))


if __name__ == "__main__":
    app()
