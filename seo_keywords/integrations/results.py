"""Outcome types returned by remote keyword generation clients."""

from dataclasses import dataclass
from typing import Any, Optional, Union


@dataclass(frozen=True)
class RemoteOk:
    """The service answered with a usable result-set payload."""
    payload: dict[str, Any]


@dataclass(frozen=True)
class RemoteParseError:
    """The service answered but the body could not be interpreted."""
    message: str
    raw: str = ""


@dataclass(frozen=True)
class RemoteServiceError:
    """The service was unreachable or returned a non-success status."""
    status: Optional[int]
    message: str


RemoteResult = Union[RemoteOk, RemoteParseError, RemoteServiceError]

RESULT_KEYS = (
    "primary_keywords",
    "long_tail_keywords",
    "local_keywords",
    "content_ideas",
    "seo_tips",
)


def looks_like_result_set(payload: Any) -> bool:
    """True when ``payload`` is a dict carrying at least one result category."""
    return isinstance(payload, dict) and any(key in payload for key in RESULT_KEYS)
