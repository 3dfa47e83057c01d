"""Commitsight CLI."""

from __future__ import annotations

import asyncio
import io
import sys
from pathlib import Path

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from commitsight.analysis import AnalysisPipeline, RichProgressReporter
from commitsight.clients.http import build_request_context, create_http_client
from commitsight.errors import CommitsightError
from commitsight.github import GitHubClient
from commitsight.llm import create_provider
from commitsight.models.profile import UserProfile
from commitsight.models.skill import SkillTrend
from commitsight.settings import Settings
from commitsight.storage import ProfileStore

app = typer.Typer(help="Analyze GitHub commit history and rate developer skills")
console = Console()
err_console = Console(stderr=True)

OUTPUT_FORMATS = {"text", "json"}
TOP_SKILLS = 10

_TREND_MARKERS = {
    SkillTrend.IMPROVING: "↑",
    SkillTrend.DECLINING: "↓",
    SkillTrend.DORMANT: "⏸",
}


def _configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def _settings_from_args(
    database: Path | None = None,
    max_commits: int | None = None,
    include_forks: bool | None = None,
    verbose: bool = False,
) -> Settings:
    settings = Settings()
    if database is not None:
        settings.database_path = database
    if max_commits is not None:
        settings.max_commits_per_repo = max_commits
    if include_forks:
        settings.include_forks = True
    if verbose:
        settings.log_level = "DEBUG"
    _configure_logging(settings.log_level)
    return settings


async def _analyze(settings: Settings, username: str) -> UserProfile:
    github_token, _ = settings.require_credentials()
    provider = create_provider(settings)
    store = ProfileStore(settings.database_path)
    ctx = build_request_context(settings)
    try:
        async with await create_http_client(settings, token=github_token) as client:
            pipeline = AnalysisPipeline(
                GitHubClient(client, ctx),
                provider,
                store,
                settings,
                progress=RichProgressReporter(err_console),
            )
            return await pipeline.analyze_user(username)
    finally:
        store.close()


def _load_cached(settings: Settings, username: str) -> UserProfile | None:
    store = ProfileStore(settings.database_path)
    try:
        return store.load(username)
    finally:
        store.close()


def render_profile(profile: UserProfile, out: Console) -> None:
    """Print a profile as a short text report."""

    user = profile.user
    summary = profile.summary
    out.print(f"[bold]Profile Analysis: {user.login}[/bold]")
    if user.name:
        out.print(f"Name: {user.name}")
    if user.bio:
        out.print(f"Bio: {user.bio}")
    out.print(f"Commits analyzed: {profile.total_commits_analyzed}")
    out.print(f"Repositories: {len(profile.repositories)}")
    out.print(f"Experience Level: {summary.experience_level}")

    if profile.skills:
        table = Table(title="Top Skills")
        table.add_column("Skill")
        table.add_column("Category")
        table.add_column("Score", justify="right")
        table.add_column("Confidence", justify="right")
        table.add_column("Trend")
        table.add_column("Percentile", justify="right")
        for rating in profile.skills[:TOP_SKILLS]:
            marker = _TREND_MARKERS.get(rating.trend, "")
            table.add_row(
                rating.skill.name,
                str(rating.skill.category),
                f"{rating.proficiency_score}/100",
                f"{rating.confidence:.0%}",
                f"{rating.trend} {marker}".strip(),
                "-" if rating.percentile_rank is None else str(rating.percentile_rank),
            )
        out.print(table)
    else:
        out.print("No skills detected.")

    if summary.primary_languages:
        out.print(f"Primary Languages: {', '.join(summary.primary_languages)}")
    if summary.primary_domains:
        out.print(f"Primary Domains: {', '.join(str(d) for d in summary.primary_domains)}")
    if summary.strengths:
        out.print("Strengths:")
        for item in summary.strengths:
            out.print(f"  + {item.area}: {item.description}")
    if summary.weaknesses:
        out.print("Areas for Improvement:")
        for item in summary.weaknesses:
            out.print(f"  - {item.area}: {item.description}")

    style = summary.coding_style
    out.print(
        f"Coding Style: tests {style.writes_tests:.0%}, documentation {style.documents_code:.0%}, "
        f"conventions {style.follows_conventions:.0%}"
    )
    out.print(f"Analyzed on: {profile.analysis_date:%Y-%m-%d %H:%M:%S} UTC")


def _emit(profile: UserProfile, output_format: str, output: Path | None) -> None:
    if output_format == "json":
        text = profile.model_dump_json(indent=2)
        if output is None:
            typer.echo(text)
            return
    else:
        if output is None:
            render_profile(profile, console)
            return
        recorder = Console(record=True, width=120, file=io.StringIO())
        render_profile(profile, recorder)
        text = recorder.export_text()
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    logger.info("Output written to: {}", output)


@app.command("analyze")
def analyze(
    username: str = typer.Argument(..., help="GitHub username to analyze"),
    output_format: str = typer.Option("text", "--format", help="Output format: text or json"),
    output: Path | None = typer.Option(None, "--output", help="Write the report to this file"),
    max_commits: int | None = typer.Option(None, "--max-commits", help="Maximum commits per repository"),
    include_forks: bool = typer.Option(False, "--include-forks", help="Include forked repositories"),
    database: Path | None = typer.Option(None, "--database", help="SQLite database path"),
    cached: bool = typer.Option(False, "--cached", help="Reuse a stored profile when available"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """Analyze a user's commits and print their skill profile."""

    selected = output_format.strip().lower()
    if selected not in OUTPUT_FORMATS:
        raise typer.BadParameter("format must be one of: text, json")
    settings = _settings_from_args(database, max_commits, include_forks, verbose)

    try:
        profile = _load_cached(settings, username) if cached else None
        if profile is not None:
            logger.info("Using cached profile from {}", profile.analysis_date)
        else:
            if cached:
                logger.info("No cached profile found, performing fresh analysis")
            profile = asyncio.run(_analyze(settings, username))
    except CommitsightError as exc:
        err_console.print(f"[red]error:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    _emit(profile, selected, output)


@app.command("show")
def show(
    username: str = typer.Argument(..., help="GitHub username"),
    output_format: str = typer.Option("text", "--format", help="Output format: text or json"),
    database: Path | None = typer.Option(None, "--database", help="SQLite database path"),
) -> None:
    """Show a stored profile."""

    selected = output_format.strip().lower()
    if selected not in OUTPUT_FORMATS:
        raise typer.BadParameter("format must be one of: text, json")
    settings = _settings_from_args(database)
    profile = _load_cached(settings, username)
    if profile is None:
        err_console.print(f"No stored profile for {username}")
        raise typer.Exit(code=1)
    _emit(profile, selected, None)


@app.command("profiles")
def profiles(
    database: Path | None = typer.Option(None, "--database", help="SQLite database path"),
) -> None:
    """List stored profiles, most recent first."""

    settings = _settings_from_args(database)
    store = ProfileStore(settings.database_path)
    try:
        usernames = store.list_profiles()
    finally:
        store.close()

    table = Table(title="Stored Profiles", min_width=40)
    table.add_column("Username")
    for name in usernames:
        table.add_row(name)
    console.print(table)


if __name__ == "__main__":
    app()
