"""CLI entry point for weeports."""

from __future__ import annotations

import sys
from email.message import Message
from pathlib import Path

import click

from weeports import __version__
from weeports.config import ConfigError, default_config_path, load_config
from weeports.difficulties import read_difficulties
from weeports.gitlab import GitLabClient, UpstreamError
from weeports.logging import get_logger, sanitize_for_log, setup_logging
from weeports.mailer import DeliveryError, Mailer
from weeports.report import (
    DIFFICULTIES_TITLE,
    IssueSource,
    MergeRequestCorrelator,
    ProjectNameResolver,
    ReportAssembler,
    ReportContext,
)

logger = get_logger("cli")


def _prompt_difficulties() -> list[str]:
    click.echo(DIFFICULTIES_TITLE)
    return read_difficulties(click.get_text_stream("stdin"))


def _preview(message: Message, body: str) -> str:
    """Headers of ``message`` followed by the plain report text."""
    headers = "".join(f"{name}: {value}\n" for name, value in message.items())
    return f"{headers}\n{body}"


@click.command()
@click.version_option(version=__version__, prog_name="weeports")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help=f"Path to the configuration file (default: {default_config_path()})",
)
@click.option(
    "--lookback-weeks",
    type=click.IntRange(min=1),
    default=None,
    help="Report issues closed in this many past weeks (default: from config or 1)",
)
@click.option(
    "--no-difficulties",
    is_flag=True,
    help="Do not ask for the main difficulties section",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Print the email instead of sending it",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable debug logging on the console",
)
def main(
    config_path: Path | None,
    lookback_weeks: int | None,
    no_difficulties: bool,
    dry_run: bool,
    verbose: bool,
) -> None:
    """Send a weekly digest of your GitLab issues by email.

    Lists the issues you closed recently and the ones due this week, each
    with its open merge request when one can be matched by branch name.
    """
    try:
        config = load_config(config_path)
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    setup_logging(
        log_dir=config.logging.dir,
        level="DEBUG" if verbose else config.logging.level,
        console=verbose,
    )
    weeks = lookback_weeks if lookback_weeks is not None else config.report.lookback_weeks

    client = GitLabClient(config.gitlab.url, config.gitlab.token)
    context = ReportContext(client=client, username=config.gitlab.username)
    assembler = ReportAssembler(
        source=IssueSource(context),
        resolver=ProjectNameResolver(context),
        correlator=MergeRequestCorrelator(context),
        deduplicate_due=config.report.deduplicate_due,
    )

    try:
        with client:
            report = assembler.build(
                weeks,
                difficulties=None if no_difficulties else _prompt_difficulties,
            )
    except UpstreamError as e:
        message = sanitize_for_log(str(e))
        logger.error("Report aborted: %s", message)
        click.echo(f"GitLab error: {message}", err=True)
        sys.exit(1)

    today = context.now.astimezone().date()
    mailer = Mailer(
        host=config.smtp.host,
        port=config.smtp.port,
        username=config.smtp.username,
        password=config.smtp.password,
    )

    if dry_run:
        message = mailer.build_message(config.recipient_email, report.body, today)
        click.echo(_preview(message, report.body))
        return

    try:
        mailer.send(config.recipient_email, report.body, today)
    except DeliveryError as e:
        click.echo(f"Delivery error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Report sent to {config.recipient_email}")


if __name__ == "__main__":
    main()
