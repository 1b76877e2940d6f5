import sys
import asyncio
import argparse
from typing import Any, List, Optional, Sequence

# --- Settings/Logging ---
from rosterwatch.logging.setup import setup_logging
from rosterwatch.config.settings import settings

setup_logging()

from loguru import logger

from rosterwatch.models.enums import RegionOutcome
from rosterwatch.notifications.push_notifier import ExpoPushNotifier
from rosterwatch.notifications.social_poster import TwitterPoster
from rosterwatch.pipeline.region_pipeline import RegionPipeline, TickSummary
from rosterwatch.pipeline.scheduler import TickScheduler
from rosterwatch.pipeline.update_recorder import UpdateRecorder
from rosterwatch.scrapers.sheet_scraper import SheetScraper
from rosterwatch.storage.document_store import DocumentStore, JsonFileStore
from rosterwatch.storage.snapshot_store import SnapshotStore

from rich import print
from rich.markup import escape
from rich.panel import Panel

OUTCOME_STYLES = {
    RegionOutcome.UNCHANGED: "dim",
    RegionOutcome.UPDATED: "green",
    RegionOutcome.FAILED: "red",
}


def print_summary(summary: TickSummary) -> None:
    """Prints a per-region summary of a finished tick."""
    if summary.fatal_error:
        print(Panel(escape(summary.fatal_error), title=f"Tick {summary.timestamp} failed", style="red"))
        return

    lines = []
    for result in summary.regions:
        style = OUTCOME_STYLES[result.outcome]
        detail = escape(result.error or f"{result.teams} teams, {result.changes} changes")
        lines.append(f"[{style}]{result.region:<10} {result.outcome.value:<10}[/{style}] {detail}")
    for message in summary.messages:
        lines.append(f"[bold]{escape(f'[{message.region}]')}[/bold] {escape(message.message)}")

    print(Panel("\n".join(lines) or "No regions configured.", title=f"Tick {summary.timestamp}"))


async def build_document_store() -> DocumentStore:
    if settings.storage_backend == "supabase":
        # Imported lazily so the JSON backend does not need Supabase reachable
        from rosterwatch.storage.supabase_client import (
            SupabaseDocumentStore,
            initialize_supabase,
        )

        return SupabaseDocumentStore(await initialize_supabase())
    return JsonFileStore(settings.data_dir)


async def shutdown(scheduler: Optional[TickScheduler], clients: Sequence[Any]) -> None:
    """Lets an in-flight tick finish, then closes the HTTP clients it uses."""
    if scheduler:
        await scheduler.wait_idle()
    for client in clients:
        await client.close()


async def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the application."""
    parser = argparse.ArgumentParser(description="Watch published roster sheets for changes.")
    parser.add_argument("--once", action="store_true", help="Run a single tick and exit.")
    args = parser.parse_args(argv)

    logger.info("Starting rosterwatch - fetch, diff, and announce roster changes")

    scraper = SheetScraper()
    notifier = ExpoPushNotifier()
    poster = TwitterPoster()
    scheduler: Optional[TickScheduler] = None
    try:
        store = SnapshotStore(await build_document_store())
        pipeline = RegionPipeline(
            scraper=scraper,
            store=store,
            recorder=UpdateRecorder(store, notifier=notifier, poster=poster),
        )

        if args.once:
            summary = await pipeline.run_tick()
            if summary:
                print_summary(summary)
            return

        scheduler = TickScheduler(
            pipeline.run_tick,
            settings.poll_interval_minutes,
            on_result=print_summary,
        )
        await scheduler.run_forever()
    finally:
        await shutdown(scheduler, [scraper, notifier, poster])


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Execution interrupted by user (KeyboardInterrupt).")
        sys.exit(0)
    except Exception as e:
        logger.exception(f"Unhandled exception in main execution: {e}")
        sys.exit(1)
