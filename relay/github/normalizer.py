"""Turn raw GitHub webhook bodies into typed `Event` values.

Only a body that cannot be read as structured data at all is rejected.
A recognized event kind whose nested fields have an unexpected shape
degrades to `UnrecognizedDetail` and is still delivered.
"""

import json
import logging
from typing import Any
from urllib.parse import parse_qs

from pydantic import BaseModel, ValidationError

from relay.errors import MalformedBodyError
from relay.github.events import (
    GITHUB_BASE_URL,
    UNKNOWN_ACTOR,
    UNKNOWN_REPOSITORY,
    Actor,
    Event,
    EventDetail,
    IssueDetail,
    PullRequestDetail,
    PushDetail,
    ReleaseDetail,
    Repository,
    UnrecognizedDetail,
    WorkflowRunDetail,
)

logger = logging.getLogger(__name__)

FORM_PAYLOAD_FIELD = "payload"


# ---------------------------------------------------------------------------
# Wire shapes (only the fields the relay renders)
# ---------------------------------------------------------------------------


class _BaseRef(BaseModel):
    ref: str


class _PullRequestPayload(BaseModel):
    number: int
    title: str
    html_url: str
    state: str
    merged: bool | None = None
    base: _BaseRef


class _IssuePayload(BaseModel):
    number: int
    title: str
    html_url: str
    state: str


class _PushPayload(BaseModel):
    ref: str
    compare: str
    commits: list[Any]


class _WorkflowRunPayload(BaseModel):
    name: str
    status: str
    conclusion: str | None = None
    html_url: str
    head_branch: str


class _ReleasePayload(BaseModel):
    tag_name: str
    name: str | None = None
    html_url: str
    draft: bool
    prerelease: bool


# ---------------------------------------------------------------------------
# Body decoding
# ---------------------------------------------------------------------------


def _load_document(body: bytes) -> Any:
    """Decode JSON, falling back to a form body with a JSON `payload` field."""
    try:
        return json.loads(body)
    except (ValueError, RecursionError):
        pass

    try:
        form = parse_qs(body.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise MalformedBodyError("body is neither JSON nor form-encoded") from e

    values = form.get(FORM_PAYLOAD_FIELD)
    if not values:
        raise MalformedBodyError(f"form body has no '{FORM_PAYLOAD_FIELD}' field")

    try:
        return json.loads(values[0])
    except (ValueError, RecursionError) as e:
        raise MalformedBodyError(f"form '{FORM_PAYLOAD_FIELD}' field is not valid JSON") from e


def _text(obj: dict, key: str, default: str) -> str:
    value = obj.get(key)
    if isinstance(value, str) and value:
        return value
    return default


def _sub_object(document: dict, key: str) -> dict:
    value = document.get(key)
    return value if isinstance(value, dict) else {}


def _parse_repository(document: dict) -> Repository:
    repo = _sub_object(document, "repository")
    return Repository(
        full_name=_text(repo, "full_name", UNKNOWN_REPOSITORY),
        html_url=_text(repo, "html_url", GITHUB_BASE_URL),
    )


def _parse_actor(document: dict) -> Actor:
    sender = _sub_object(document, "sender")
    return Actor(
        login=_text(sender, "login", UNKNOWN_ACTOR),
        html_url=_text(sender, "html_url", GITHUB_BASE_URL),
    )


# ---------------------------------------------------------------------------
# Per-kind detail extraction
# ---------------------------------------------------------------------------


def _pull_request(document: dict) -> PullRequestDetail:
    pr = _PullRequestPayload.model_validate(document.get("pull_request"))
    return PullRequestDetail(
        number=pr.number,
        title=pr.title,
        url=pr.html_url,
        state=pr.state,
        merged=pr.merged,
        target_branch=pr.base.ref,
    )


def _issue(document: dict) -> IssueDetail:
    issue = _IssuePayload.model_validate(document.get("issue"))
    return IssueDetail(
        number=issue.number,
        title=issue.title,
        url=issue.html_url,
        state=issue.state,
    )


def _push(document: dict) -> PushDetail:
    # Push fields live at the top level of the payload
    push = _PushPayload.model_validate(document)
    return PushDetail(
        ref_name=push.ref,
        compare_url=push.compare,
        commit_count=len(push.commits),
    )


def _workflow_run(document: dict) -> WorkflowRunDetail:
    run = _WorkflowRunPayload.model_validate(document.get("workflow_run"))
    return WorkflowRunDetail(
        name=run.name,
        status=run.status,
        conclusion=run.conclusion,
        url=run.html_url,
        branch=run.head_branch,
    )


def _release(document: dict) -> ReleaseDetail:
    release = _ReleasePayload.model_validate(document.get("release"))
    return ReleaseDetail(
        tag=release.tag_name,
        name=release.name,
        url=release.html_url,
        draft=release.draft,
        prerelease=release.prerelease,
    )


_DETAIL_PARSERS = {
    "pull_request": _pull_request,
    "issues": _issue,
    "push": _push,
    "workflow_run": _workflow_run,
    "release": _release,
}


def _parse_detail(kind: str, document: dict) -> EventDetail:
    parser = _DETAIL_PARSERS.get(kind)
    if parser is None:
        return UnrecognizedDetail()

    try:
        return parser(document)
    except ValidationError as e:
        logger.warning(f"Unexpected '{kind}' payload shape, treating as unrecognized: {e.error_count()} error(s)")
        return UnrecognizedDetail()


def parse_event(kind: str, body: bytes) -> Event:
    """Parse a webhook body declared as event `kind` into an `Event`.

    Raises:
        MalformedBodyError: the body is neither JSON nor a form carrying JSON.
    """
    document = _load_document(body)
    if not isinstance(document, dict):
        document = {}

    action = document.get("action")
    if not isinstance(action, str):
        action = None

    return Event(
        kind=kind,
        action=action,
        repository=_parse_repository(document),
        actor=_parse_actor(document),
        detail=_parse_detail(kind, document),
    )
