"""Typer based command line entry point for forumflow."""

from __future__ import annotations

import typer

from forumflow.config import load_config
from forumflow.core.errors import ConfigError
from forumflow.core.logger import get_logger
from forumflow.services.session import AutomationSuccess, SessionRunner

app = typer.Typer(help="Log into the forum, open the first topic and screenshot it.", add_completion=False)


@app.command()
def main() -> None:
    """Run one scripted forum session using forumflow/config/forum.yaml."""

    logger = get_logger()
    try:
        config = load_config()
    except ConfigError as exc:
        logger.error("Unable to load configuration: %s", exc)
        typer.secho(f"Unable to load configuration: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2) from exc

    result = SessionRunner(logger=logger).run(config)

    if isinstance(result, AutomationSuccess):
        info = result.topic_info
        typer.echo("Automation completed successfully!")
        typer.echo(f"Topic: {info.title}")
        typer.echo(f"Author: {info.author}")
        typer.echo(f"Category: {info.category}")
        typer.echo(f"Tags: {', '.join(info.tags)}")
        typer.echo(f"URL: {info.url}")
        typer.echo(f"Screenshot: {result.screenshot_path}")
        return

    typer.secho(f"Automation failed: {result.error}", fg=typer.colors.RED, err=True)
    typer.secho(f"Error screenshot: {result.screenshot_path}", err=True)
    raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
