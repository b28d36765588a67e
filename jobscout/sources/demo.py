"""Last-resort source: two clearly labelled demo postings echoing the query."""
from __future__ import annotations

import time

from jobscout.log import get_logger
from jobscout.models import Job
from jobscout.sources.base import JobSource, TimeFilter

log = get_logger(__name__)


class DemoSource(JobSource):
    name = "demo"

    def search(self, term: str, location: str, time_filter: TimeFilter = TimeFilter.ANY_TIME) -> list[Job]:
        stamp = int(time.time() * 1000)
        term = term.strip() or "Job"
        location = location.strip() or "Remote"
        log.info("DemoSource generating sample jobs for %r", term)
        return [
            Job(
                id=f"demo-1-{stamp}",
                title=f"{term} - Demo Position",
                company="Demo Company",
                location=location,
                description=(
                    f"This is a demo job posting for {term}. Live search is unavailable right now, "
                    "so this sample shows what results look like. It is not a real opening."
                ),
                tags=["Demo", "Example", "Not Real"],
                salary="Demo Salary",
                posted_date="Demo Date",
                source_url="https://example.com/demo-job",
            ),
            Job(
                id=f"demo-2-{stamp}",
                title=f"Senior {term} - Demo",
                company="Example Corp",
                location=location,
                description=(
                    f"Another demo posting for a senior {term} role. "
                    "Try the search again later for live listings."
                ),
                tags=["Demo", "Senior Level", "Example"],
                salary="Demo Range",
                posted_date="Demo Date",
                source_url="https://example.com/demo-job-2",
            ),
        ]
