"""
Typed views of raw GitHub event envelopes.

Each concrete event type gets its own payload shape; anything else parses as
GenericEvent. Only the fields the transformer reads are modelled and every
optional field has a default, so partially populated payloads still parse.
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ghactivity.core.logger import get_logger

logger = get_logger(__name__)


class _Lenient(BaseModel):
    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        # GitHub sends null for unset fields; treat them as absent so defaults apply
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class Actor(_Lenient):
    login: str
    avatar_url: str = ""


class RepoRef(_Lenient):
    name: str


class PushCommit(_Lenient):
    sha: str
    message: str = ""


class IssueLike(_Lenient):
    """Pull request or issue object embedded in an event payload."""

    number: Optional[int] = None
    title: Optional[str] = None
    html_url: Optional[str] = None


class PushPayload(_Lenient):
    size: int = 0
    commits: list[PushCommit] = Field(default_factory=list)


class PullRequestPayload(_Lenient):
    action: str = ""
    number: Optional[int] = None
    pull_request: Optional[IssueLike] = None


class IssuesPayload(_Lenient):
    action: str = ""
    issue: Optional[IssueLike] = None

    @property
    def number(self) -> Optional[int]:
        return self.issue.number if self.issue else None


class RefPayload(_Lenient):
    ref: Optional[str] = None
    ref_type: str = ""


class BaseEvent(_Lenient):
    type: str
    actor: Actor
    repo: RepoRef
    created_at: str = ""


class PushEvent(BaseEvent):
    payload: PushPayload = Field(default_factory=PushPayload)


class PullRequestEvent(BaseEvent):
    payload: PullRequestPayload = Field(default_factory=PullRequestPayload)


class IssuesEvent(BaseEvent):
    payload: IssuesPayload = Field(default_factory=IssuesPayload)


class IssueCommentEvent(BaseEvent):
    payload: dict[str, Any] = Field(default_factory=dict)


class WatchEvent(BaseEvent):
    payload: dict[str, Any] = Field(default_factory=dict)


class ForkEvent(BaseEvent):
    payload: dict[str, Any] = Field(default_factory=dict)


class CreateEvent(BaseEvent):
    payload: RefPayload = Field(default_factory=RefPayload)


class DeleteEvent(BaseEvent):
    payload: RefPayload = Field(default_factory=RefPayload)


class GenericEvent(BaseEvent):
    """Any event type without a dedicated shape."""

    payload: dict[str, Any] = Field(default_factory=dict)


GitHubEvent = Union[
    PushEvent,
    PullRequestEvent,
    IssuesEvent,
    IssueCommentEvent,
    WatchEvent,
    ForkEvent,
    CreateEvent,
    DeleteEvent,
    GenericEvent,
]

EVENT_MODELS: dict[str, type[BaseEvent]] = {
    "PushEvent": PushEvent,
    "PullRequestEvent": PullRequestEvent,
    "IssuesEvent": IssuesEvent,
    "IssueCommentEvent": IssueCommentEvent,
    "WatchEvent": WatchEvent,
    "ForkEvent": ForkEvent,
    "CreateEvent": CreateEvent,
    "DeleteEvent": DeleteEvent,
}


def parse_event(raw: dict[str, Any]) -> GitHubEvent:
    """
    Parse one raw event into its typed variant.

    Raises:
        ValidationError: If the envelope itself (type, actor, repo) is malformed
    """
    model = EVENT_MODELS.get(raw.get("type", ""), GenericEvent)
    return model.model_validate(raw)


def parse_events(raw_events: Optional[list[dict[str, Any]]]) -> list[GitHubEvent]:
    """Parse a list of raw events, skipping malformed envelopes."""
    events: list[GitHubEvent] = []
    for raw in raw_events or []:
        try:
            events.append(parse_event(raw))
        except ValidationError as e:
            logger.warning(
                "Skipping malformed GitHub event",
                extra={"event_id": raw.get("id"), "event_type": raw.get("type"), "errors": e.error_count()},
            )
    return events
