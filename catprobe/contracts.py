"""Core data contracts for catprobe tokens and sessions."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .constants import (
    CATR_COOKIE_NAME,
    CATR_COOKIE_PARAMS,
    CATR_DEADLINE,
    CATR_EXPADD,
    CATR_HEADER_NAME,
    CATR_HEADER_PARAMS,
    CATR_TYPE,
    CLAIM_CTI,
    CLAIM_EXP,
    CLAIM_IAT,
    CLAIM_ISS,
    CLAIM_SUB,
    DEFAULT_SUBJECT,
    DEFAULT_TOKEN_ID,
)


class TokenTransport(str, Enum):
    """How the token travels with outbound requests."""

    HEADER = "header"
    COOKIE = "cookie"
    # Initial token as query, moved into a cookie by the server. Needed for
    # AirPlay devices that cannot set headers on the first request.
    COOKIE_AS_QUERY = "cookie-as-query"


class RenewalType(IntEnum):
    """Renewal mechanisms defined for the ``catr`` claim."""

    AUTOMATIC = 0
    COOKIE = 1
    HEADER = 2
    REDIRECT = 3


class RegisteredClaims(BaseModel):
    """CWT registered claims carried by every token."""

    model_config = ConfigDict(frozen=True)

    issuer: str
    subject: str = DEFAULT_SUBJECT
    issued_at: int
    expiration: int
    token_id: bytes = DEFAULT_TOKEN_ID

    def to_cbor_map(self) -> Dict[int, Any]:
        return {
            CLAIM_ISS: self.issuer,
            CLAIM_SUB: self.subject,
            CLAIM_EXP: self.expiration,
            CLAIM_IAT: self.issued_at,
            CLAIM_CTI: self.token_id,
        }


class RenewalPolicy(BaseModel):
    """The ``catr`` renewal claim telling a server how to refresh the token."""

    model_config = ConfigDict(frozen=True)

    renewal_type: RenewalType
    expadd: int
    deadline: Optional[int] = None
    cookie_name: Optional[str] = None
    header_name: Optional[str] = None
    cookie_params: Optional[List[str]] = None
    header_params: Optional[List[str]] = None

    def to_cbor_map(self) -> Dict[int, Any]:
        """Return the integer keyed map embedded in the token."""
        claim: Dict[int, Any] = {
            CATR_TYPE: int(self.renewal_type),
            CATR_EXPADD: self.expadd,
        }
        if self.deadline is not None:
            claim[CATR_DEADLINE] = self.deadline
        if self.cookie_name is not None:
            claim[CATR_COOKIE_NAME] = self.cookie_name
        if self.header_name is not None:
            claim[CATR_HEADER_NAME] = self.header_name
        if self.cookie_params is not None:
            claim[CATR_COOKIE_PARAMS] = list(self.cookie_params)
        if self.header_params is not None:
            claim[CATR_HEADER_PARAMS] = list(self.header_params)
        return claim


class WorkerState(str, Enum):
    CONSTRUCTED = "constructed"
    PLAYLIST_FETCHED = "playlist_fetched"
    SEGMENT_RESOLVED = "segment_resolved"
    POLLING = "polling"
    DONE = "done"
    FAILED = "failed"


class SessionResult(BaseModel):
    """Outcome of a completed polling session."""

    playlist_url: str
    segment_url: str
    iterations: int = 0
    renewals: int = 0
    statuses: List[int] = Field(default_factory=list)
