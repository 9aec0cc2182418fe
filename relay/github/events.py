"""Normalized GitHub event model.

`Event.detail` is a closed, discriminated union over the event kinds the
relay knows how to render. Anything else is `UnrecognizedDetail`.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

UNKNOWN_REPOSITORY = "unknown/repository"
UNKNOWN_ACTOR = "unknown"
GITHUB_BASE_URL = "https://github.com"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Repository(_Frozen):
    full_name: str = UNKNOWN_REPOSITORY
    html_url: str = GITHUB_BASE_URL


class Actor(_Frozen):
    login: str = UNKNOWN_ACTOR
    html_url: str = GITHUB_BASE_URL


class PullRequestDetail(_Frozen):
    type: Literal["pull_request"] = "pull_request"
    number: int
    title: str
    url: str
    state: str
    merged: bool | None = None
    target_branch: str


class IssueDetail(_Frozen):
    type: Literal["issue"] = "issue"
    number: int
    title: str
    url: str
    state: str


class PushDetail(_Frozen):
    type: Literal["push"] = "push"
    ref_name: str
    compare_url: str
    commit_count: int


class WorkflowRunDetail(_Frozen):
    type: Literal["workflow_run"] = "workflow_run"
    name: str
    status: str
    conclusion: str | None = None
    url: str
    branch: str


class ReleaseDetail(_Frozen):
    type: Literal["release"] = "release"
    tag: str
    name: str | None = None
    url: str
    draft: bool
    prerelease: bool


class UnrecognizedDetail(_Frozen):
    type: Literal["unrecognized"] = "unrecognized"


EventDetail = Annotated[
    Union[
        PullRequestDetail,
        IssueDetail,
        PushDetail,
        WorkflowRunDetail,
        ReleaseDetail,
        UnrecognizedDetail,
    ],
    Field(discriminator="type"),
]


class Event(_Frozen):
    kind: str
    action: str | None = None
    repository: Repository = Repository()
    actor: Actor = Actor()
    detail: EventDetail = UnrecognizedDetail()

    @property
    def key(self) -> str:
        """Composite routing key: `kind` or `kind.action`."""
        if self.action is None:
            return self.kind
        return f"{self.kind}.{self.action}"
