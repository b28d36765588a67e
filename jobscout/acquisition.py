"""Acquisition fallback chain: synthetic boards, then AI search, then demo data.

Stages run one after another; a stage is only tried when every earlier one
failed or came back empty. The demo stage always produces results, so a
search with a term or location never ends empty.
"""
from __future__ import annotations

import random
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from jobscout.errors import JobScoutError, validation_error
from jobscout.gateway import GenerationGateway
from jobscout.log import get_logger
from jobscout.models import Job
from jobscout.sources import AISearchSource, DemoSource, default_boards
from jobscout.sources.base import JobSource, TimeFilter

log = get_logger(__name__)

SEARCH_REQUIRED_MESSAGE = "Please enter a search term or location."


class SearchStage(str, Enum):
    SCRAPER = "scraper"
    AI_SEARCH = "ai_search"
    DEMO = "demo"


@dataclass
class SearchOutcome:
    jobs: list[Job] = field(default_factory=list)
    stage: SearchStage = SearchStage.SCRAPER

    @property
    def is_sample(self) -> bool:
        return self.stage == SearchStage.DEMO


def _search_source(source: JobSource, term: str, location: str, time_filter: TimeFilter) -> list[Job]:
    """Wrapper for parallel board searching."""
    try:
        results = source.search(term, location, time_filter)
        log.info("[%s] returned %d jobs", source.name, len(results))
        return results
    except Exception as exc:
        log.error("[%s] FAILED: %s", source.name, exc)
        return []


class AcquisitionChain:
    def __init__(
        self,
        boards: Sequence[JobSource],
        ai_source: JobSource | None,
        demo_source: JobSource,
        max_workers: int | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.boards = list(boards)
        self.ai_source = ai_source
        self.demo_source = demo_source
        self.max_workers = max_workers or max(len(self.boards), 1)
        self.rng = rng or random.Random()

    def scrape(self, term: str, location: str, time_filter: TimeFilter) -> list[Job]:
        """Run every board concurrently; results keep board order, then get shuffled."""
        if not self.boards:
            return []
        log.info("Searching %d board(s) in parallel...", len(self.boards))
        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            futures = [
                pool.submit(_search_source, board, term, location, time_filter)
                for board in self.boards
            ]
            jobs = [job for future in futures for job in future.result()]
        self.rng.shuffle(jobs)
        return jobs

    def search(self, term: str, location: str, time_filter: TimeFilter = TimeFilter.ANY_TIME) -> SearchOutcome:
        term, location = (term or "").strip(), (location or "").strip()
        if not term and not location:
            raise validation_error(SEARCH_REQUIRED_MESSAGE)

        jobs = self.scrape(term, location, time_filter)
        if jobs:
            log.info("Scraper stage produced %d jobs", len(jobs))
            return SearchOutcome(jobs, SearchStage.SCRAPER)

        if self.ai_source is not None:
            log.warning("Scraper stage empty, falling back to AI search")
            try:
                jobs = self.ai_source.search(term, location, time_filter)
            except JobScoutError as exc:
                log.warning("AI search failed (%s): %s", exc.kind.value, exc.message)
                jobs = []
            except Exception:
                log.exception("AI search crashed")
                jobs = []
            if jobs:
                return SearchOutcome(jobs, SearchStage.AI_SEARCH)

        log.warning("Falling back to demo jobs (no live jobs returned)")
        return SearchOutcome(self.demo_source.search(term, location, time_filter), SearchStage.DEMO)


def default_chain(gateway: GenerationGateway | None = None) -> AcquisitionChain:
    ai_source = AISearchSource(gateway) if gateway is not None else None
    return AcquisitionChain(default_boards(), ai_source, DemoSource())
