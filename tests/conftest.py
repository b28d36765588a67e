from __future__ import annotations

import os

os.environ.setdefault("JOBSCOUT_FILE_LOG", "0")

import json
from typing import Any

import pytest

from jobscout.acquisition import AcquisitionChain
from jobscout.models import Job, UserProfile
from jobscout.provider import Completion
from jobscout.seed import SeedData, demo_catalog, demo_tracked, demo_wishlist
from jobscout.sources.base import JobSource, TimeFilter
from jobscout.sources.demo import DemoSource
from jobscout.store import EntityStore
from jobscout.toasts import ToastChannel


class FakeProvider:
    """Replays canned replies; an Exception reply is raised instead."""

    def __init__(self, *replies: Any) -> None:
        self.replies = list(replies)
        self.calls: list[dict[str, Any]] = []

    def complete(self, prompt, *, search=False, image=None, json_mode=False) -> Completion:
        self.calls.append({"prompt": prompt, "search": search, "image": image, "json_mode": json_mode})
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, Completion):
            return reply
        if not isinstance(reply, str):
            reply = json.dumps(reply)
        return Completion(text=reply)


class ListSource(JobSource):
    def __init__(self, jobs: list[Job], name: str = "list") -> None:
        self.jobs = jobs
        self.name = name
        self.calls = 0

    def search(self, term: str, location: str, time_filter: TimeFilter = TimeFilter.ANY_TIME) -> list[Job]:
        self.calls += 1
        return list(self.jobs)


class FailingSource(JobSource):
    name = "failing"

    def __init__(self, exc: Exception) -> None:
        self.exc = exc
        self.calls = 0

    def search(self, term: str, location: str, time_filter: TimeFilter = TimeFilter.ANY_TIME) -> list[Job]:
        self.calls += 1
        raise self.exc


class MemoryBackend:
    def __init__(self) -> None:
        self.profiles: dict[str, UserProfile] = {}
        self.tracked: dict[str, list] = {}
        self.wishlists: dict[str, list] = {}
        self.saves = 0

    def load_profile(self, user_id):
        return self.profiles.get(user_id)

    def save_profile(self, user_id, profile):
        self.saves += 1
        self.profiles[user_id] = profile

    def load_tracked(self, user_id):
        return self.tracked.get(user_id)

    def save_tracked(self, user_id, jobs):
        self.saves += 1
        self.tracked[user_id] = list(jobs)

    def load_wishlist(self, user_id):
        return self.wishlists.get(user_id)

    def save_wishlist(self, user_id, jobs):
        self.saves += 1
        self.wishlists[user_id] = list(jobs)


class FailingBackend(MemoryBackend):
    def _fail(self, *args):
        raise OSError("disk full")

    save_profile = save_tracked = save_wishlist = _fail


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def make_job(job_id: str, title: str = "Engineer", company: str = "Acme") -> Job:
    return Job(
        id=job_id,
        title=title,
        company=company,
        location="Remote",
        description=f"{title} at {company}",
        tags=["Python"],
        source_url=f"https://jobs.example/{job_id}",
    )


def make_seed() -> SeedData:
    return SeedData(
        profile=UserProfile(name="Pat Lee", email="pat@example.com", bio="Engineer", base_resume="PAT LEE"),
        catalog=demo_catalog(),
        tracked=demo_tracked(),
        wishlist=demo_wishlist(),
    )


def make_store(jobs: list[Job] | None = None, *, backend=None, chain=None) -> EntityStore:
    chain = chain or AcquisitionChain([ListSource(jobs or [])], None, DemoSource())
    return EntityStore(chain, toasts=ToastChannel(clock=FakeClock()), backend=backend, seed=make_seed())


@pytest.fixture
def store() -> EntityStore:
    return make_store([make_job("live-1"), make_job("live-2", "Designer")])
