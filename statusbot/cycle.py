# statusbot/cycle.py
"""
Poll cycle.

Each run fetches the feed, parses it, compares it with the previous
poll and renders three buckets of posts (new, ended, updated). The raw
XML of the last successful poll is kept on disk so a restart does not
repost every active event.

A run whose fetch or parse fails raises before anything is compared and
leaves the previous snapshot untouched.
"""

import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, FrozenSet, List, Optional, Tuple

from .ingestion.faa_nasstatus import FeedParseError, delay_types, xml_to_tree
from .logging import get_logger
from .status.changes import ChangeSet, diff
from .status.models import EventRecord
from .status.parser import parse_events
from .status.posts import PostGenerator, image_hints
from .status.reasons import ImageHint

logger = get_logger(__name__)

DEFAULT_MAX_WORKERS = 8


@dataclass(frozen=True)
class Post:
    """Text ready to hand to a posting adapter."""
    text: str
    comparison_key: str
    image_hints: FrozenSet[ImageHint] = frozenset()
    beta: bool = False


@dataclass
class CycleResult:
    """Posts produced by one run."""
    started_at: datetime
    new_posts: List[Post] = field(default_factory=list)
    ended_posts: List[Post] = field(default_factory=list)
    updated_posts: List[Post] = field(default_factory=list)
    record_count: int = 0

    @property
    def post_count(self) -> int:
        return len(self.new_posts) + len(self.ended_posts) + len(self.updated_posts)


class StatusCycle:
    """
    Runs poll cycles one at a time.

    Args:
        generator: PostGenerator with airport and region collaborators
        fetch_xml: Callable returning the feed XML (FAANASStatusClient.fetch_xml)
        snapshot_path: File holding the previous poll's XML; None keeps it in memory only
        max_workers: Threads used to render posts
        post_on_first_run: When False, the first run after start only records
            the feed; posting starts with the second run
        refresh_reference: Called at the start of every run to refresh
            reference data; returns True when the data changed
    """

    def __init__(
        self,
        generator: PostGenerator,
        fetch_xml: Callable[[], str],
        snapshot_path: Optional[str] = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
        post_on_first_run: bool = True,
        refresh_reference: Optional[Callable[[], bool]] = None,
    ):
        self.generator = generator
        self.fetch_xml = fetch_xml
        self.snapshot_path = Path(snapshot_path) if snapshot_path else None
        self.max_workers = max_workers
        self.post_on_first_run = post_on_first_run
        self.refresh_reference = refresh_reference

        self._previous_xml: Optional[str] = self._load_snapshot()
        self._current: Optional[Tuple[EventRecord, ...]] = None
        self.last_successful_run: Optional[datetime] = None

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    def _load_snapshot(self) -> Optional[str]:
        if not self.snapshot_path or not self.snapshot_path.exists():
            return None
        try:
            xml_text = self.snapshot_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("snapshot_unreadable", path=str(self.snapshot_path), error=str(e))
            return None
        logger.info("snapshot_loaded", path=str(self.snapshot_path))
        return xml_text

    def _save_snapshot(self, xml_text: str) -> None:
        if not self.snapshot_path:
            return
        self.snapshot_path.parent.mkdir(parents=True, exist_ok=True)
        self.snapshot_path.write_text(xml_text, encoding="utf-8")

    @staticmethod
    def _records(xml_text: str, now: datetime) -> List[EventRecord]:
        return parse_events(delay_types(xml_to_tree(xml_text)), now)

    def _previous_records(self, now: datetime) -> List[EventRecord]:
        if not self._previous_xml:
            return []
        try:
            return self._records(self._previous_xml, now)
        except FeedParseError as e:
            # Treated as a first run
            logger.warning("snapshot_unreadable", error=str(e))
            return []

    # ------------------------------------------------------------------
    # Running
    # ------------------------------------------------------------------

    def current_delays(self) -> Optional[Tuple[EventRecord, ...]]:
        """Records from the last successful run, or None before the first one."""
        return self._current

    def run(self, now: Optional[datetime] = None) -> CycleResult:
        """
        Run one poll cycle.

        Raises:
            HttpClientError: Feed could not be fetched or parsed
        """
        now = now or datetime.now(timezone.utc)
        result = CycleResult(started_at=now)

        if self.refresh_reference and self.refresh_reference():
            self.generator.clear_cache()

        xml_text = self.fetch_xml()
        records = self._records(xml_text, now)

        if self.last_successful_run is None and not self.post_on_first_run:
            logger.info("first_run_recorded", records=len(records))
        else:
            previous = self._previous_records(now)
            generator = self.generator.with_now(now)
            changes = diff(previous, records, generator.to_new_post)
            self._render(generator, changes, result)

        self._save_snapshot(xml_text)
        self._previous_xml = xml_text
        self._current = tuple(records)
        self.last_successful_run = now
        result.record_count = len(records)

        logger.info(
            "cycle_completed",
            records=len(records),
            new=len(result.new_posts),
            ended=len(result.ended_posts),
            updated=len(result.updated_posts),
        )
        return result

    def _render(self, generator: PostGenerator, changes: ChangeSet, result: CycleResult) -> None:
        def update_text(pair):
            previous, current = pair
            return generator.to_update_post(previous, current) or generator.to_new_post(current)

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            new_texts = list(executor.map(generator.to_new_post, changes.added))
            ended_texts = list(executor.map(generator.to_ended_post, changes.removed))
            updated_texts = list(executor.map(update_text, changes.updated))

        result.new_posts = self._posts(changes.added, new_texts)
        result.ended_posts = self._posts(changes.removed, ended_texts)
        result.updated_posts = self._posts([current for _, current in changes.updated], updated_texts)

    @staticmethod
    def _posts(records: List[EventRecord], texts: List[Optional[str]]) -> List[Post]:
        posts = []
        for record, text in zip(records, texts):
            if not text:
                logger.debug("post_skipped", comparison_key=record.comparison_hash)
                continue
            posts.append(Post(
                text=text,
                comparison_key=record.comparison_hash,
                image_hints=image_hints(record),
                beta=record.is_beta,
            ))
        return posts

    def run_forever(self, interval_seconds: float, handle: Optional[Callable[[CycleResult], None]] = None) -> None:
        """
        Run cycles every `interval_seconds` until interrupted.

        A failing cycle is logged and the loop continues.
        """
        while True:
            try:
                result = self.run()
                if handle:
                    handle(result)
            except Exception as e:
                logger.error("cycle_failed", exc_info=True, error=str(e))
            time.sleep(interval_seconds)
