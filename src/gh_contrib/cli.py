"""CLI entry point for gh-contrib."""

from __future__ import annotations

import logging
from datetime import datetime

import click
from rich.logging import RichHandler

from . import __version__, dates
from .config import GhConfigFile, Settings
from .github.auth import TokenError, resolve_token
from .github.client import GitHubClient, GitHubError
from .orchestrator import run_all, run_graph, run_issues, run_pulls, run_summarize
from .renderer import make_console
from .summarizer import ModelsSummarizer

logger = logging.getLogger(__name__)


def _resolve_date(value: str | None) -> str | None:
    """Resolve a date value that may be relative (e.g. '30d') or absolute (YYYY-MM-DD)."""
    if value is None:
        return None
    relative = dates.parse_relative_date(value)
    if relative is not None:
        return relative
    return value


def _since_callback(ctx: click.Context, param: click.Parameter, value: str | None) -> str:
    if value is None:
        return dates.default_since()
    if value == "":
        return ""
    resolved = _resolve_date(value)
    try:
        datetime.strptime(resolved, dates.DATE_FORMAT)
    except ValueError:
        raise click.BadParameter(f"expected YYYY-MM-DD or a relative date like 30d, got {value!r}") from None
    return resolved


def _configure_logging(debug: bool) -> None:
    handler = RichHandler(
        console=make_console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )
    # urllib3 logs every connection at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def _exit_with(code: int) -> None:
    if code:
        click.get_current_context().exit(code)


class _State:
    def __init__(self, settings: Settings, token: str | None) -> None:
        self.settings = settings
        self._token = token

    def token(self) -> str:
        try:
            return resolve_token(self._token)
        except TokenError as exc:
            raise click.ClickException(
                f"{exc}. Pass --token, set GITHUB_TOKEN, or run 'gh auth login'."
            ) from exc

    def client(self) -> GitHubClient:
        return GitHubClient(self.token())


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="gh-contrib")
@click.option(
    "--since",
    default=None,
    callback=_since_callback,
    help="Only include items created after this date (YYYY-MM-DD or relative: 7d, 2w, 3m, 1y). Default: 30d.",
)
@click.option("--debug", is_flag=True, help="Enable debug logging.")
@click.option("--org", default=None, help="Override the configured organization.")
@click.option("--model", default=None, help="Override the configured or default AI model.")
@click.option("--body-only", is_flag=True, help="Print only the bodies of pull requests and issues.")
@click.option("--token", envvar="GITHUB_TOKEN", default=None, help="GitHub token (or set GITHUB_TOKEN).")
@click.pass_context
def main(
    ctx: click.Context,
    since: str,
    debug: bool,
    org: str | None,
    model: str | None,
    body_only: bool,
    token: str | None,
) -> None:
    """Understand the GitHub issues and pull requests a user authored in an organization."""
    _configure_logging(debug)
    settings = Settings.resolve(
        GhConfigFile(),
        org=org,
        model=model,
        since=since,
        debug=debug,
        body_only=body_only,
    )
    logger.debug("Settings: %s", settings)
    ctx.obj = _State(settings, token)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        try:
            with ctx.obj.client() as client:
                click.echo(f"\nrunning as {client.current_user()}")
        except (click.ClickException, GitHubError) as exc:
            logger.debug("Could not look up the current user: %s", exc)


@main.command()
@click.argument("login", required=False)
@click.pass_obj
def graph(state: _State, login: str | None) -> None:
    """Weekly contribution graph for LOGIN (default: the authenticated user)."""
    with state.client() as client:
        code = run_graph(client, login, state.settings)
    _exit_with(code)


@main.command()
@click.argument("login")
@click.pass_obj
def pulls(state: _State, login: str) -> None:
    """Pull requests authored by LOGIN, as CSV."""
    with state.client() as client:
        code = run_pulls(client, login, state.settings)
    _exit_with(code)


@main.command()
@click.argument("login")
@click.pass_obj
def issues(state: _State, login: str) -> None:
    """Issues authored by LOGIN, as CSV."""
    with state.client() as client:
        code = run_issues(client, login, state.settings)
    _exit_with(code)


@main.command(name="all")
@click.argument("login")
@click.pass_obj
def all_items(state: _State, login: str) -> None:
    """Pull requests and issues authored by LOGIN, as CSV."""
    with state.client() as client:
        code = run_all(client, login, state.settings)
    _exit_with(code)


@main.command()
@click.argument("text", required=False)
@click.pass_obj
def summarize(state: _State, text: str | None) -> None:
    """Summarize PR/issue bodies from TEXT or stdin."""
    if text is None:
        text = click.get_text_stream("stdin").read()
    summarizer = ModelsSummarizer(state.token(), state.settings.model)
    code = run_summarize(summarizer, text)
    _exit_with(code)
