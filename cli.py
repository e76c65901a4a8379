"""CLI commands for RSVP administration."""

import asyncio
from datetime import timedelta

import typer
import uvicorn

from src.admin.session_token import issue_session_token, verify_session_token
from src.config.settings import get_settings
from src.rsvps.features.list_rsvps.read_model import AttendingFilter, StoreRSVPListReadModel
from src.rsvps.repository import build_record_store

app = typer.Typer(help="CLI commands for RSVP administration")


@app.command()
def issue_token(
    username: str = typer.Option(
        None,
        "--username",
        "-u",
        help="Admin username to embed, defaults to ADMIN_USER",
    ),
    days: int = typer.Option(
        None,
        "--days",
        "-d",
        help="Lifetime in days, defaults to SESSION_TTL_DAYS",
    ),
):
    """Mint an admin session token signed with AUTH_SECRET."""
    settings = get_settings()
    if not settings.auth_secret:
        typer.secho("AUTH_SECRET is not configured", fg=typer.colors.RED)
        raise typer.Exit(1)

    username = username or settings.admin_user
    if not username:
        typer.secho("No username given and ADMIN_USER is not configured", fg=typer.colors.RED)
        raise typer.Exit(1)

    token, payload = issue_session_token(
        username=username,
        secret=settings.auth_secret,
        ttl=timedelta(days=days or settings.session_ttl_days),
    )
    typer.secho("Session token issued!", fg=typer.colors.GREEN)
    typer.secho(f"  User: {payload.username}", fg=typer.colors.BLUE)
    typer.secho(f"  Expires (epoch ms): {payload.expires_at}", fg=typer.colors.BLUE)
    typer.secho(f"  Cookie {settings.session_cookie_name}={token}", fg=typer.colors.CYAN)


@app.command()
def verify_token(
    token: str = typer.Argument(..., help="Session token to check"),
):
    """Check a session token against AUTH_SECRET."""
    settings = get_settings()
    verification = verify_session_token(token, settings.auth_secret)
    if not verification.allowed:
        typer.secho("Token rejected", fg=typer.colors.RED)
        raise typer.Exit(1)
    typer.secho(f"Token valid for {verification.username}", fg=typer.colors.GREEN)


@app.command()
def list_rsvps(
    attending: AttendingFilter = typer.Option(
        None,
        "--attending",
        "-a",
        help="Only show responses that are attending (yes) or not (no)",
    ),
):
    """Print stored responses from the configured storage backend."""
    read_model = StoreRSVPListReadModel(build_record_store(get_settings()))
    listing = asyncio.run(read_model.list_rsvps(attending))

    for record in listing.items:
        contact = " / ".join(value for value in (record.email, record.phone) if value)
        color = typer.colors.GREEN if record.attending else typer.colors.YELLOW
        typer.secho(
            f"{record.updated_at}  {'YES' if record.attending else 'NO '}  "
            f"{record.name} <{contact}>  party of {record.headcount}",
            fg=color,
        )
    typer.echo()
    typer.secho(
        f"{listing.count} responses, {listing.headcount} people attending",
        fg=typer.colors.CYAN,
    )


@app.command()
def serve(
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """Run the API with uvicorn on APP_HOST:APP_PORT."""
    settings = get_settings()
    uvicorn.run("src.main:app", host=settings.app_host, port=settings.app_port, reload=reload)


if __name__ == "__main__":
    app()
