"""Fetch a job posting page and reduce it to readable text."""
from __future__ import annotations

from urllib.parse import urlparse

import requests
from bs4 import BeautifulSoup

from jobscout.errors import ErrorKind, JobScoutError, validation_error
from jobscout.log import get_logger
from jobscout.retry import retry

log = get_logger(__name__)

USER_AGENT = "Mozilla/5.0 (compatible; jobscout/0.1; +https://example.com/jobscout)"
MAX_POSTING_CHARS = 15_000
_NOISE_TAGS = ("script", "style", "noscript", "svg", "nav", "footer", "form")


def validate_url(url: str) -> str:
    url = (url or "").strip()
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise validation_error("Enter a full job posting URL starting with http:// or https://")
    return url


@retry(attempts=2, base_delay=1.5, retry_on=(requests.ConnectionError, requests.Timeout))
def _get(url: str) -> requests.Response:
    return requests.get(url, headers={"User-Agent": USER_AGENT}, timeout=15)


def html_to_text(html: str) -> str:
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(list(_NOISE_TAGS)):
        tag.decompose()
    title = soup.title.get_text(strip=True) if soup.title else ""
    main = soup.find("main") or soup.find("article") or soup.body or soup
    lines = [line.strip() for line in main.get_text("\n").splitlines()]
    body = "\n".join(line for line in lines if line)
    return f"{title}\n\n{body}".strip() if title else body


def fetch_posting_text(url: str) -> str:
    """Download ``url`` and return its visible text.

    Sites that block automated access (403/429) are reported as a
    validation error so the user can paste the text instead.
    """
    url = validate_url(url)
    try:
        r = _get(url)
    except requests.RequestException as exc:
        log.warning("Fetching %s failed: %s", url, exc)
        raise JobScoutError(
            ErrorKind.PROVIDER_UNAVAILABLE,
            "Could not reach that job posting. Paste the description text instead.",
            detail=str(exc),
        ) from exc

    if r.status_code in (401, 403, 429):
        log.info("%s blocked automated access (%d)", urlparse(url).netloc, r.status_code)
        raise validation_error(
            "That site blocks automated access. Paste the job description text instead."
        )
    if r.status_code >= 400:
        raise validation_error(f"The job posting returned HTTP {r.status_code}. Check the URL.")

    text = html_to_text(r.text)
    if not text:
        raise validation_error("The page had no readable text. Paste the job description instead.")
    log.debug("Fetched %d characters from %s", len(text), url)
    return text[:MAX_POSTING_CHARS]
