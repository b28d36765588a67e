"""Error taxonomy shared by the gateway, the acquisition chain and the store."""
from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    PROVIDER_BLOCKED = "provider_blocked"
    PROVIDER_EMPTY = "provider_empty"
    PARSE = "parse"
    NOT_FOUND = "not_found"
    PROVIDER_UNAVAILABLE = "provider_unavailable"


class JobScoutError(Exception):
    """A failure callers can branch on by ``kind``.

    ``message`` is always safe to show a user. ``detail`` holds diagnostics
    (block reasons, exception text) and is only ever logged.
    """

    def __init__(self, kind: ErrorKind, message: str, detail: str | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.detail = detail

    def __repr__(self) -> str:
        return f"JobScoutError({self.kind.value!r}, {self.message!r})"


class ConfigurationError(RuntimeError):
    """Missing or invalid configuration; raised at startup and never swallowed."""


def validation_error(message: str) -> JobScoutError:
    return JobScoutError(ErrorKind.VALIDATION, message)


def blocked_error(reason: str | None, what: str) -> JobScoutError:
    if reason:
        message = f"The AI provider blocked the request while {what} ({reason})."
    else:
        message = f"The AI provider blocked the request while {what}."
    return JobScoutError(ErrorKind.PROVIDER_BLOCKED, message, detail=reason)


def empty_error(what: str) -> JobScoutError:
    return JobScoutError(
        ErrorKind.PROVIDER_EMPTY,
        f"The AI returned an empty response while {what}. Please try again.",
    )


def parse_error(what: str, detail: str | None = None) -> JobScoutError:
    return JobScoutError(
        ErrorKind.PARSE,
        f"The AI response could not be understood while {what}. Please try again.",
        detail=detail,
    )


def unavailable_error(what: str, detail: str | None = None) -> JobScoutError:
    return JobScoutError(
        ErrorKind.PROVIDER_UNAVAILABLE,
        f"The AI service is unavailable right now, so {what} failed. Please try again later.",
        detail=detail,
    )
