"""In-memory entity store shared by every screen.

Holds the profile, the job catalog, tracked applications, the wishlist and
the current live-search results. Every mutation happens under one lock and
is narrated with a toast. When a backing store is configured and a user is
signed in, the new collection is written through before it replaces the
local one; a failed write leaves local state untouched.

Reads hand out deep copies, so callers change state only through the
methods below. Searching runs the acquisition chain without holding the
lock, so the wishlist and tracker stay usable while a search is in flight.
"""
from __future__ import annotations

import threading
from copy import deepcopy
from dataclasses import replace
from typing import Any, Callable, Iterable, Mapping

from jobscout.acquisition import SEARCH_REQUIRED_MESSAGE, AcquisitionChain, SearchOutcome
from jobscout.errors import JobScoutError
from jobscout.log import get_logger
from jobscout.models import (
    ApplicationInsights,
    ApplicationStatus,
    Job,
    OfferDetails,
    StructuredResume,
    ToastMessage,
    ToastType,
    TRACKED_DATA_FIELDS,
    TrackedJob,
    UserProfile,
)
from jobscout.persistence import BackingStore
from jobscout.seed import SeedData, default_seed
from jobscout.sources.base import TimeFilter
from jobscout.toasts import ToastChannel

log = get_logger(__name__)

_NESTED_FIELDS: dict[str, Callable[[Any], Any]] = {
    "offer_details": OfferDetails.from_dict,
    "application_insights": ApplicationInsights.from_dict,
    "structured_resume": StructuredResume.from_dict,
}


def _plain_job(job: Job, wishlisted: bool) -> Job:
    return Job(**{**job.job_fields(), "tags": list(job.tags), "is_wishlisted": wishlisted})


class EntityStore:
    def __init__(
        self,
        acquisition: AcquisitionChain,
        toasts: ToastChannel | None = None,
        backend: BackingStore | None = None,
        seed: SeedData | None = None,
    ) -> None:
        self.acquisition = acquisition
        self.channel = toasts or ToastChannel()
        self.backend = backend
        self._seed = seed or default_seed()
        self._lock = threading.RLock()
        self._user_id: str | None = None
        self._searches_in_flight = 0
        self._reset()

    def _reset(self) -> None:
        seed = self._seed
        self._profile = replace(seed.profile)
        self._catalog = [replace(j, tags=list(j.tags)) for j in seed.catalog]
        self._load_collections(
            [replace(t, tags=list(t.tags)) for t in seed.tracked],
            [_plain_job(j, True) for j in seed.wishlist],
        )
        self._live_results: list[Job] = []
        self._search_error: str | None = None
        self._last_search: SearchOutcome | None = None

    def _load_collections(self, tracked: list[TrackedJob], wishlist: list[Job]) -> None:
        self._tracked = tracked
        self._wishlist = wishlist
        self._wishlist_ids = {j.id for j in wishlist}

    # ── Read surface ────────────────────────────────────────────────────

    @property
    def profile(self) -> UserProfile:
        with self._lock:
            return replace(self._profile)

    @property
    def catalog(self) -> list[Job]:
        with self._lock:
            return deepcopy(self._catalog)

    @property
    def tracked_jobs(self) -> list[TrackedJob]:
        with self._lock:
            return deepcopy(self._tracked)

    @property
    def wishlist(self) -> list[Job]:
        with self._lock:
            return deepcopy(self._wishlist)

    @property
    def live_results(self) -> list[Job]:
        with self._lock:
            return deepcopy(self._live_results)

    @property
    def is_searching(self) -> bool:
        with self._lock:
            return self._searches_in_flight > 0

    @property
    def search_error(self) -> str | None:
        with self._lock:
            return self._search_error

    @property
    def last_search(self) -> SearchOutcome | None:
        with self._lock:
            return deepcopy(self._last_search)

    @property
    def user_id(self) -> str | None:
        return self._user_id

    @property
    def signed_in(self) -> bool:
        return self._user_id is not None

    # ── Toasts ──────────────────────────────────────────────────────────

    def show_toast(self, message: str, type: ToastType = ToastType.INFO) -> ToastMessage:
        return self.channel.show(message, type)

    def dismiss_toast(self, toast_id: int) -> bool:
        return self.channel.dismiss(toast_id)

    def toasts(self) -> list[ToastMessage]:
        return self.channel.active()

    # ── Persistence ─────────────────────────────────────────────────────

    def _write_through(self, what: str, save: Callable[[BackingStore, str], None]) -> bool:
        """Persist before committing; on failure emit one error toast."""
        if self.backend is None or self._user_id is None:
            return True
        try:
            save(self.backend, self._user_id)
        except Exception:
            log.exception("Saving %s for %s failed", what, self._user_id)
            self.channel.show(f"Could not save {what}. Your change was not applied.", ToastType.ERROR)
            return False
        return True

    # ── Lookups ─────────────────────────────────────────────────────────

    def get_job_by_id(self, job_id: str, fallback: Job | None = None) -> Job | None:
        """Tracked copy first (it carries the application data), then live
        results, the wishlist and the catalog; ``fallback`` when nothing matches."""
        with self._lock:
            for collection in (self._tracked, self._live_results, self._wishlist, self._catalog):
                for job in collection:
                    if job.id == job_id:
                        return deepcopy(job)
        return fallback

    def is_job_wishlisted(self, job_id: str) -> bool:
        with self._lock:
            return job_id in self._wishlist_ids

    def get_tracked_job(self, job_id: str) -> TrackedJob | None:
        with self._lock:
            return deepcopy(next((t for t in self._tracked if t.id == job_id), None))

    # ── Tracker ─────────────────────────────────────────────────────────

    def track_job(self, job: Job) -> bool:
        with self._lock:
            if any(t.id == job.id for t in self._tracked):
                self.channel.show("This job is already in your tracker.", ToastType.INFO)
                return False
            record = TrackedJob.from_job(job, ApplicationStatus.SAVED)
            record.tags = list(job.tags)
            record.is_wishlisted = job.id in self._wishlist_ids
            updated = [record, *self._tracked]
            if not self._write_through("the tracked job", lambda b, uid: b.save_tracked(uid, updated)):
                return False
            self._tracked = updated
        log.info("Tracking %s at %s", job.title, job.company)
        self.channel.show("Job saved to tracker!", ToastType.SUCCESS)
        return True

    def update_job_status(self, job_id: str, status: ApplicationStatus | str) -> bool:
        try:
            status = ApplicationStatus(status)
        except ValueError:
            self.channel.show(f"Unknown application status '{status}'.", ToastType.ERROR)
            return False
        with self._lock:
            index = self._tracked_index(job_id)
            if index is None:
                self.channel.show("Could not find that job in your tracker.", ToastType.ERROR)
                return False
            updated = list(self._tracked)
            updated[index] = replace(updated[index], status=status)
            if not self._write_through("the status change", lambda b, uid: b.save_tracked(uid, updated)):
                return False
            self._tracked = updated
        self.channel.show(f"Status updated to {status.value}.", ToastType.SUCCESS)
        return True

    def save_tracked_job_data(self, job_id: str, **data: Any) -> bool:
        """Merge application data into a tracked job; id and status are never merged."""
        unknown = sorted(set(data) - TRACKED_DATA_FIELDS)
        if unknown:
            log.warning("Rejected tracked-job fields for %s: %s", job_id, unknown)
            self.channel.show(f"Cannot update {', '.join(unknown)} on a tracked job.", ToastType.ERROR)
            return False
        for key, parse in _NESTED_FIELDS.items():
            if isinstance(data.get(key), Mapping):
                data[key] = parse(data[key])
        with self._lock:
            index = self._tracked_index(job_id)
            if index is None:
                self.channel.show("Track this job first to save your work on it.", ToastType.ERROR)
                return False
            updated = list(self._tracked)
            updated[index] = replace(updated[index], **data)
            if not self._write_through("your changes", lambda b, uid: b.save_tracked(uid, updated)):
                return False
            self._tracked = updated
        self.channel.show("Saved to your tracked job.", ToastType.SUCCESS)
        return True

    def _tracked_index(self, job_id: str) -> int | None:
        return next((i for i, t in enumerate(self._tracked) if t.id == job_id), None)

    # ── Wishlist ────────────────────────────────────────────────────────

    def toggle_wishlist(self, job: Job) -> bool:
        """Flip wishlist membership; returns whether the job is now wishlisted."""
        with self._lock:
            now_wishlisted = job.id not in self._wishlist_ids
            if now_wishlisted:
                updated = [*self._wishlist, _plain_job(job, True)]
            else:
                updated = [j for j in self._wishlist if j.id != job.id]
            if not self._write_through("your wishlist", lambda b, uid: b.save_wishlist(uid, updated)):
                return not now_wishlisted
            self._wishlist = updated
            self._wishlist_ids = {j.id for j in updated}
            self._flag_copies({job.id}, now_wishlisted)
        if now_wishlisted:
            self.channel.show("Added to wishlist", ToastType.SUCCESS)
        else:
            self.channel.show("Removed from wishlist", ToastType.INFO)
        return now_wishlisted

    def add_all_to_wishlist(self, jobs: Iterable[Job]) -> int:
        with self._lock:
            new_jobs: list[Job] = []
            seen = set(self._wishlist_ids)
            for job in jobs:
                if job.id not in seen:
                    seen.add(job.id)
                    new_jobs.append(_plain_job(job, True))
            if not new_jobs:
                self.channel.show("All jobs are already in your wishlist.", ToastType.INFO)
                return 0
            updated = [*self._wishlist, *new_jobs]
            if not self._write_through("your wishlist", lambda b, uid: b.save_wishlist(uid, updated)):
                return 0
            self._wishlist = updated
            self._wishlist_ids = seen
            self._flag_copies({j.id for j in new_jobs}, True)
        self.channel.show(f"Added {len(new_jobs)} jobs to wishlist!", ToastType.SUCCESS)
        return len(new_jobs)

    def _flag_copies(self, ids: set[str], wishlisted: bool) -> None:
        self._live_results = [
            replace(j, is_wishlisted=wishlisted) if j.id in ids else j for j in self._live_results
        ]
        self._tracked = [
            replace(t, is_wishlisted=wishlisted) if t.id in ids else t for t in self._tracked
        ]

    # ── Live search ─────────────────────────────────────────────────────

    def perform_live_search(
        self,
        term: str,
        location: str,
        time_filter: TimeFilter = TimeFilter.ANY_TIME,
    ) -> SearchOutcome | None:
        """Run the acquisition chain and make its results current.

        Never raises: failures end as ``search_error`` plus an error toast.
        The last search to finish wins the results slot.
        """
        term, location = (term or "").strip(), (location or "").strip()
        if not term and not location:
            with self._lock:
                self._search_error = SEARCH_REQUIRED_MESSAGE
            self.channel.show(SEARCH_REQUIRED_MESSAGE, ToastType.ERROR)
            return None

        with self._lock:
            self._searches_in_flight += 1
            self._search_error = None
            self._live_results = []

        try:
            outcome = self.acquisition.search(term, location, time_filter)
        except JobScoutError as exc:
            self._fail_search(exc.message)
            return None
        except Exception:
            log.exception("Live search for %r in %r crashed", term, location)
            self._fail_search("An unexpected error occurred while searching. Please try again.")
            return None

        with self._lock:
            self._searches_in_flight -= 1
            self._live_results = [replace(j, is_wishlisted=j.id in self._wishlist_ids) for j in outcome.jobs]
            self._last_search = outcome

        count = len(outcome.jobs)
        if outcome.is_sample:
            self.channel.show("Live search is unavailable. Showing demo jobs.", ToastType.INFO)
        else:
            self.channel.show(f"Found {count} jobs.", ToastType.SUCCESS)
        log.info("Search %r in %r: %d jobs from %s", term, location, count, outcome.stage.value)
        return outcome

    def _fail_search(self, message: str) -> None:
        with self._lock:
            self._searches_in_flight -= 1
            self._search_error = message
        self.channel.show(message, ToastType.ERROR)

    def clear_live_search(self) -> None:
        with self._lock:
            self._live_results = []
            self._search_error = None
            self._last_search = None

    # ── Profile and identity ────────────────────────────────────────────

    def update_user_profile(self, profile: UserProfile) -> bool:
        with self._lock:
            updated = replace(profile)
            if not self._write_through("your profile", lambda b, uid: b.save_profile(uid, updated)):
                return False
            self._profile = updated
        self.channel.show("Profile updated successfully!", ToastType.SUCCESS)
        return True

    def sign_in(self, user_id: str, claims: Mapping[str, Any] | None = None) -> None:
        """Load the user's collections from the backend, or start them from
        the seed data with the identity claims applied."""
        claims = claims or {}
        stored_profile = stored_tracked = stored_wishlist = None
        if self.backend is not None:
            try:
                stored_profile = self.backend.load_profile(user_id)
                stored_tracked = self.backend.load_tracked(user_id)
                stored_wishlist = self.backend.load_wishlist(user_id)
            except Exception:
                log.exception("Loading data for %s failed, starting from demo data", user_id)
                self.channel.show("Could not load your saved data. Showing demo data.", ToastType.ERROR)
                stored_profile = stored_tracked = stored_wishlist = None

        with self._lock:
            self._reset()
            self._user_id = user_id
            self._profile = stored_profile or self._profile.with_claims(claims)
            tracked = self._tracked if stored_tracked is None else stored_tracked
            wishlist = self._wishlist if stored_wishlist is None else stored_wishlist
            self._load_collections(tracked, wishlist)
            self._flag_copies(self._wishlist_ids, True)
        log.info("Signed in as %s", user_id)
        self.channel.show(f"Welcome, {self.profile.name or 'there'}!", ToastType.SUCCESS)

    def sign_out(self) -> None:
        with self._lock:
            self._user_id = None
            self._reset()
        self.channel.clear()
        log.info("Signed out, store reset to demo data")
