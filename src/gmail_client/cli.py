"""Command-line interface for gmail-client.

    gmail-client authenticate --redirect-uri http://localhost:8080/callback
    gmail-client list-messages --query is:unread --max-results 10
    gmail-client list-labels

Credentials and OAuth settings come from ``GMAIL_*`` environment variables.
"""

from __future__ import annotations

import logging
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from gmail_client.client import GmailClient
from gmail_client.config import GmailConfig

app = typer.Typer(
    name="gmail-client",
    help="Inspect a Gmail account through the REST API",
    add_completion=False,
)

console = Console()

logger = logging.getLogger(__name__)


def _build_client(access_token: Optional[str] = None) -> GmailClient:
    if access_token:
        return GmailClient.from_env(access_token=access_token)
    return GmailClient.from_env()


def _fail(error: Exception) -> None:
    logger.debug("CLI command failed", exc_info=True)
    console.print(f"[bold red]Error:[/bold red] {error}", style="red")
    raise typer.Exit(code=1)


@app.command("authenticate")
def authenticate(
    redirect_uri: Optional[str] = typer.Option(
        None, "--redirect-uri", help="OAuth redirect URI (defaults to GMAIL_REDIRECT_URI)",
    ),
):
    """Print the URL to visit to authorize this client."""
    try:
        client = GmailClient(GmailConfig.from_env())
        url = client.get_authorization_url(redirect_uri)
    except Exception as e:
        _fail(e)
    console.print("Visit this URL to authorize gmail-client:")
    console.print(url, soft_wrap=True)


@app.command("list-messages")
def list_messages(
    query: Optional[str] = typer.Option(None, "--query", "-q", help="Gmail search query"),
    max_results: int = typer.Option(10, "--max-results", "-n", help="Messages to show"),
    access_token: Optional[str] = typer.Option(
        None, "--access-token", envvar="GMAIL_ACCESS_TOKEN", help="OAuth access token",
    ),
):
    """List recent messages."""
    try:
        with _build_client(access_token) as client:
            emails = client.list_messages(query, max_results=max_results)
    except Exception as e:
        _fail(e)

    table = Table(title="Messages")
    table.add_column("ID", style="cyan")
    table.add_column("From", style="green")
    table.add_column("Subject")
    table.add_column("Date", style="yellow")
    for email in emails:
        table.add_row(
            email.id,
            email.sender or "",
            email.subject or "(no subject)",
            email.date.strftime("%Y-%m-%d %H:%M") if email.date else "",
        )
    console.print(table)


@app.command("list-labels")
def list_labels(
    access_token: Optional[str] = typer.Option(
        None, "--access-token", envvar="GMAIL_ACCESS_TOKEN", help="OAuth access token",
    ),
):
    """List labels with their message counts."""
    try:
        with _build_client(access_token) as client:
            labels = client.list_labels()
    except Exception as e:
        _fail(e)

    table = Table(title="Labels")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Type")
    table.add_column("Messages", justify="right")
    table.add_column("Unread", justify="right")
    for lbl in labels:
        table.add_row(
            lbl.id,
            lbl.name,
            lbl.type or "",
            "" if lbl.messages_total is None else str(lbl.messages_total),
            "" if lbl.messages_unread is None else str(lbl.messages_unread),
        )
    console.print(table)


def main():
    app()


if __name__ == "__main__":
    main()
