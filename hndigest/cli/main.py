"""Command line entry point: ``hndigest run|preview|schedule``."""

import logging
import sys
from typing import Optional

import click

from hndigest.errors import DigestError
from hndigest.settings import Settings
from hndigest.tracker.digest import collect_ranked, resolve_date, run_digest
from hndigest.utils.tz_utils import get_zone

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _fail(e: Exception) -> None:
    logger.error("%s", e)
    sys.exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Hacker News (Japanese) daily digest to Discord."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format=LOG_FORMAT)


@cli.command()
@click.argument("date", required=False)
def run(date: Optional[str]) -> None:
    """Fetch, rank and post the digest for DATE (YYYY-MM-DD, default today)."""
    try:
        settings = Settings.from_env()
        run_digest(settings, date)
    except DigestError as e:
        _fail(e)


@cli.command()
@click.argument("date", required=False)
def preview(date: Optional[str]) -> None:
    """Print the ranked items for DATE without posting anything."""
    try:
        settings = Settings.from_env(require_webhook=False)
        run_date = resolve_date(settings, date)
        items = collect_ranked(settings, run_date)
    except DigestError as e:
        _fail(e)
        return

    click.echo(f"{run_date}: {len(items)} item(s)")
    for it in items:
        click.echo(f"{it.rank:>2}. [{it.score}] {it.title_ja} <{it.url}>")


@cli.command()
def schedule() -> None:
    """Run the digest every day at DIGEST_SCHEDULE_HOUR:DIGEST_SCHEDULE_MINUTE."""
    from apscheduler.schedulers.blocking import BlockingScheduler

    try:
        settings = Settings.from_env()
        tz = get_zone(settings.timezone)
    except DigestError as e:
        _fail(e)
        return

    def job() -> None:
        try:
            run_digest(settings)
        except DigestError as e:
            # keep the scheduler alive, tomorrow is another run
            logger.error("Scheduled digest failed: %s", e)

    scheduler = BlockingScheduler(
        timezone=tz,
        job_defaults={"coalesce": True, "max_instances": 1, "misfire_grace_time": 300},
    )
    scheduler.add_job(
        job, "cron", hour=settings.schedule_hour, minute=settings.schedule_minute, id="daily_digest"
    )
    logger.info(
        "Scheduler started, daily digest at %02d:%02d %s",
        settings.schedule_hour, settings.schedule_minute, settings.timezone,
    )
    try:
        scheduler.start()
    except (KeyboardInterrupt, SystemExit):
        scheduler.shutdown(wait=False)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
