import asyncio
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from loguru import logger

from rosterwatch.config.settings import settings
from rosterwatch.diffing.diff_engine import deep_equal
from rosterwatch.models.enums import RegionOutcome
from rosterwatch.models.log_entries import MessageLogEntry
from rosterwatch.normalization.csv_parser import ParseError, Row, parse_csv
from rosterwatch.normalization.normalizer import (
    NormalizationError,
    RosterNormalizer,
    ensure_teams,
)
from rosterwatch.pipeline.update_recorder import UpdateRecorder
from rosterwatch.scrapers.base_scraper import ScraperError
from rosterwatch.scrapers.sheet_scraper import SheetScraper
from rosterwatch.storage.document_store import StorageError
from rosterwatch.storage.snapshot_store import SnapshotStore
from rosterwatch.utils.misc_utils import utc_timestamp


@dataclass
class RegionResult:
    region: str
    outcome: RegionOutcome
    teams: int = 0
    changes: int = 0
    messages: List[MessageLogEntry] = field(default_factory=list)
    error: Optional[str] = None


@dataclass
class TickSummary:
    timestamp: str
    regions: List[RegionResult] = field(default_factory=list)
    fatal_error: Optional[str] = None

    @property
    def messages(self) -> List[MessageLogEntry]:
        return [m for r in self.regions for m in r.messages]


class RegionPipeline:
    """One tick: fetch, parse, normalize, diff and persist every region in turn.

    Each region runs inside its own error boundary, and nothing is written
    for a region until its whole fetch/normalize/diff path has succeeded.
    Only one tick runs at a time; a tick requested meanwhile is skipped.
    """

    def __init__(
        self,
        scraper: SheetScraper,
        store: SnapshotStore,
        recorder: UpdateRecorder,
        normalizer: Optional[RosterNormalizer] = None,
        regions: Optional[Dict[str, str]] = None,
        url_for_gid: Optional[Callable[[str], str]] = None,
        parser: Callable[[str], List[Row]] = parse_csv,
    ):
        self.scraper = scraper
        self.store = store
        self.recorder = recorder
        self.normalizer = normalizer or RosterNormalizer()
        self.regions = regions if regions is not None else dict(settings.region_gids)
        self.url_for_gid = url_for_gid or settings.sheet_url
        self.parser = parser
        self._lock = asyncio.Lock()

    @property
    def running(self) -> bool:
        return self._lock.locked()

    async def run_tick(self) -> Optional[TickSummary]:
        if self._lock.locked():
            logger.warning("Previous tick still running; skipping this one.")
            return None
        async with self._lock:
            return await self._run_all_regions()

    async def _run_all_regions(self) -> TickSummary:
        timestamp = utc_timestamp()
        summary = TickSummary(timestamp=timestamp)
        logger.info(f"[{timestamp}] Starting data processing...")

        try:
            await self.store.prepare()
        except Exception as e:
            logger.critical(f"[{timestamp}] Fatal error: {e}")
            summary.fatal_error = str(e)
            return summary

        for region, gid in self.regions.items():
            summary.regions.append(await self._run_region(region, gid, timestamp))

        logger.info(f"[{timestamp}] Processing completed successfully!")
        return summary

    async def _run_region(self, region: str, gid: str, timestamp: str) -> RegionResult:
        try:
            return await self.process_region(region, self.url_for_gid(gid), timestamp)
        except (ScraperError, ParseError, NormalizationError, StorageError) as e:
            logger.error(f"[{timestamp}] Error processing {region}: {e}")
            return RegionResult(region, RegionOutcome.FAILED, error=str(e))
        except Exception as e:
            logger.exception(f"[{timestamp}] Unexpected error processing {region}: {e}")
            return RegionResult(region, RegionOutcome.FAILED, error=str(e))

    async def process_region(self, region: str, url: str, timestamp: str) -> RegionResult:
        logger.info(f"[{timestamp}] Fetching data for {region}...")

        csv_text = await self.scraper.fetch_csv(url)
        rows = self.parser(csv_text)
        new_teams = ensure_teams(self.normalizer.normalize(rows))

        old_teams = await self.store.load_snapshot(region)
        if deep_equal(old_teams, new_teams):
            logger.info(f"[{timestamp}] No changes detected for {region}")
            return RegionResult(region, RegionOutcome.UNCHANGED, teams=len(new_teams))

        recorded = await self.recorder.record(region, old_teams, new_teams, timestamp)
        await self.store.save_snapshot(region, new_teams)

        return RegionResult(
            region,
            RegionOutcome.UPDATED,
            teams=len(new_teams),
            changes=len(recorded.changes),
            messages=recorded.messages,
        )
