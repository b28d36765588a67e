"""Per-user storage for the profile, tracked jobs and wishlist.

``FileBackingStore`` keeps each user under ``DATA_DIR/users/<id>-<digest>/``:
the profile as YAML, tracked jobs and the wishlist as CSV. Nested tracked
fields (tags, offer details, insights, structured résumé) are JSON-encoded
in their columns. Writes rewrite the whole file under an advisory lock.
"""
from __future__ import annotations

import csv
import fcntl
import hashlib
import json
import re
from pathlib import Path
from typing import Any, Protocol

import yaml

from jobscout.config import DATA_DIR
from jobscout.log import get_logger
from jobscout.models import Job, TrackedJob, UserProfile

log = get_logger(__name__)

JOB_HEADERS: list[str] = [
    "id", "title", "company", "location", "description",
    "tags", "salary", "posted_date", "source_url",
]
TRACKED_HEADERS: list[str] = JOB_HEADERS + [
    "status", "notes", "tailored_resume", "tailored_cover_letter",
    "offer_details", "application_insights", "structured_resume",
]
_JSON_COLUMNS = ("tags", "offer_details", "application_insights", "structured_resume")

_SAFE_ID = re.compile(r"[^A-Za-z0-9_.@-]")


class BackingStore(Protocol):
    def load_profile(self, user_id: str) -> UserProfile | None: ...
    def save_profile(self, user_id: str, profile: UserProfile) -> None: ...
    def load_tracked(self, user_id: str) -> list[TrackedJob] | None: ...
    def save_tracked(self, user_id: str, jobs: list[TrackedJob]) -> None: ...
    def load_wishlist(self, user_id: str) -> list[Job] | None: ...
    def save_wishlist(self, user_id: str, jobs: list[Job]) -> None: ...


def _lock(f, exclusive: bool = True) -> None:
    """Advisory file lock (Unix fcntl)."""
    try:
        op = fcntl.LOCK_EX if exclusive else fcntl.LOCK_SH
        fcntl.flock(f.fileno(), op)
    except (OSError, AttributeError):
        pass


def _unlock(f) -> None:
    try:
        fcntl.flock(f.fileno(), fcntl.LOCK_UN)
    except (OSError, AttributeError):
        pass


def _encode_row(data: dict[str, Any], headers: list[str]) -> dict[str, str]:
    row: dict[str, str] = {}
    for key in headers:
        value = data.get(key)
        if key in _JSON_COLUMNS:
            row[key] = json.dumps(value) if value is not None else ""
        else:
            row[key] = "" if value is None else str(value)
    return row


def _decode_row(row: dict[str, str]) -> dict[str, Any]:
    data: dict[str, Any] = {}
    for key, raw in row.items():
        if key is None:
            continue
        if key in _JSON_COLUMNS:
            try:
                data[key] = json.loads(raw) if raw else None
            except json.JSONDecodeError:
                log.warning("Ignoring malformed %s column for job %s", key, row.get("id"))
                data[key] = None
        else:
            data[key] = raw or None
    return data


class FileBackingStore:
    def __init__(self, root: Path | None = None) -> None:
        self.root = root or DATA_DIR / "users"

    def _user_dir(self, user_id: str) -> Path:
        # the digest keeps ids that sanitise alike apart
        safe = _SAFE_ID.sub("_", user_id.strip()).strip(".")[:40] or "user"
        digest = hashlib.sha256(user_id.encode("utf-8")).hexdigest()[:16]
        return self.root / f"{safe}-{digest}"

    # ── Profile ─────────────────────────────────────────────────────────

    def load_profile(self, user_id: str) -> UserProfile | None:
        path = self._user_dir(user_id) / "profile.yaml"
        if not path.exists():
            return None
        with open(path, "r", encoding="utf-8") as f:
            _lock(f, exclusive=False)
            data = yaml.safe_load(f) or {}
            _unlock(f)
        return UserProfile.from_dict(data) if isinstance(data, dict) else None

    def save_profile(self, user_id: str, profile: UserProfile) -> None:
        path = self._user_dir(user_id) / "profile.yaml"
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            _lock(f)
            yaml.safe_dump(profile.to_dict(), f, sort_keys=False, allow_unicode=True)
            _unlock(f)
        log.debug("Saved profile for %s", user_id)

    # ── Tables ──────────────────────────────────────────────────────────

    def _read_rows(self, path: Path) -> list[dict[str, Any]] | None:
        if not path.exists():
            return None
        with open(path, "r", newline="", encoding="utf-8") as f:
            _lock(f, exclusive=False)
            rows = [_decode_row(r) for r in csv.DictReader(f)]
            _unlock(f)
        return rows

    def _write_rows(self, path: Path, headers: list[str], rows: list[dict[str, Any]]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", newline="", encoding="utf-8") as f:
            _lock(f)
            w = csv.DictWriter(f, fieldnames=headers)
            w.writeheader()
            w.writerows(_encode_row(r, headers) for r in rows)
            _unlock(f)

    def load_tracked(self, user_id: str) -> list[TrackedJob] | None:
        rows = self._read_rows(self._user_dir(user_id) / "tracked.csv")
        if rows is None:
            return None
        return [TrackedJob.from_dict(r) for r in rows if r.get("id")]

    def save_tracked(self, user_id: str, jobs: list[TrackedJob]) -> None:
        self._write_rows(
            self._user_dir(user_id) / "tracked.csv",
            TRACKED_HEADERS,
            [j.to_dict() for j in jobs],
        )
        log.debug("Saved %d tracked job(s) for %s", len(jobs), user_id)

    def load_wishlist(self, user_id: str) -> list[Job] | None:
        rows = self._read_rows(self._user_dir(user_id) / "wishlist.csv")
        if rows is None:
            return None
        jobs = [Job.from_dict(r) for r in rows if r.get("id")]
        for job in jobs:
            job.is_wishlisted = True
        return jobs

    def save_wishlist(self, user_id: str, jobs: list[Job]) -> None:
        self._write_rows(
            self._user_dir(user_id) / "wishlist.csv",
            JOB_HEADERS,
            [j.job_fields() for j in jobs],
        )
        log.debug("Saved %d wishlist job(s) for %s", len(jobs), user_id)
