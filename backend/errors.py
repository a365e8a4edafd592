"""Audit failure types.

Messages are written for end users and are surfaced verbatim by callers.
"""

from enum import Enum


class AuditStage(str, Enum):
    """Orchestration states of a single audit."""

    IDLE = "idle"
    FETCHING = "fetching"
    PARSING = "parsing"
    ANALYZING = "analyzing"
    SCORING = "scoring"
    RECOMMENDING = "recommending"
    INSIGHT = "insight"
    ASSEMBLED = "assembled"
    FAILED = "failed"


class FetchErrorKind(str, Enum):
    INVALID_URL = "InvalidUrl"
    NOT_FOUND = "NotFound"
    FORBIDDEN = "Forbidden"
    UNAUTHORIZED = "Unauthorized"
    SERVER_UNAVAILABLE = "ServerUnavailable"
    SERVER_ERROR = "ServerError"
    TIMEOUT = "Timeout"
    CONNECTION_REFUSED = "ConnectionRefused"
    DNS_FAILURE = "DnsFailure"
    OTHER = "Other"


class AuditError(Exception):
    """Base class for failures that abort an audit."""

    stage = AuditStage.FAILED

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class FetchError(AuditError):
    """The page could not be retrieved (bad URL, transport failure or HTTP rejection)."""

    stage = AuditStage.FETCHING

    def __init__(self, kind: FetchErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind

    def __repr__(self) -> str:
        return f"FetchError(kind={self.kind.value!r}, message={self.message!r})"


class ParseError(AuditError):
    """The fetched markup could not be turned into a document tree."""

    stage = AuditStage.PARSING
