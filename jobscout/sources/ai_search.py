from __future__ import annotations

from jobscout.gateway import GenerationGateway
from jobscout.models import Job
from jobscout.sources.base import JobSource, TimeFilter


class AISearchSource(JobSource):
    """Free-text job search through the generation gateway's web-search model.

    The time filter is not forwarded; the model decides what counts as current.
    """

    name = "ai_search"

    def __init__(self, gateway: GenerationGateway) -> None:
        self.gateway = gateway

    def search(self, term: str, location: str, time_filter: TimeFilter = TimeFilter.ANY_TIME) -> list[Job]:
        return self.gateway.search_jobs(term, location)
