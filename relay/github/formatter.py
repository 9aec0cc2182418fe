"""Render normalized events as Telegram Markdown messages."""

import re
from typing import assert_never

from relay.github.events import (
    Event,
    IssueDetail,
    PullRequestDetail,
    PushDetail,
    ReleaseDetail,
    UnrecognizedDetail,
    WorkflowRunDetail,
)

DEFAULT_ACTION = "updated"
BRANCH_REF_PREFIX = "refs/heads/"

PR_GLYPHS = {
    "opened": "🆕",
    "closed": "❌",
    "reopened": "🔄",
    "synchronize": "📦",
}
PR_MERGED_GLYPH = "🔀"
PR_OTHER_GLYPH = "📝"

ISSUE_GLYPHS = {
    "opened": "🐛",
    "closed": "✅",
    "reopened": "🔄",
}
ISSUE_OTHER_GLYPH = "📋"

PUSH_GLYPH = "⬆️"

WORKFLOW_GLYPHS = {
    "success": "✅",
    "failure": "❌",
    "cancelled": "🚫",
}
WORKFLOW_PENDING_GLYPH = "⏳"

RELEASE_DRAFT_GLYPH = "📝"
RELEASE_PRERELEASE_GLYPH = "🧪"
RELEASE_PUBLISHED_GLYPH = "🏷️"

UNRECOGNIZED_GLYPH = "📡"

# Characters that open an entity in Telegram Markdown (v1)
_MARKDOWN_SPECIAL = re.compile(r"([_*`\[])")


def escape_markdown(text: str) -> str:
    """Backslash-escape free text placed outside an entity."""
    return _MARKDOWN_SPECIAL.sub(r"\\\1", text)


def _credit(event: Event) -> str:
    return f"_by [{event.actor.login}]({event.actor.html_url})_"


def _pull_request(event: Event, pr: PullRequestDetail) -> str:
    action = event.action or DEFAULT_ACTION
    if action == "closed" and pr.merged:
        glyph = PR_MERGED_GLYPH
    else:
        glyph = PR_GLYPHS.get(action, PR_OTHER_GLYPH)
    return (
        f"{glyph} *Pull Request {action}* [#{pr.number}]({pr.url})\n"
        f"`{pr.target_branch}` → {escape_markdown(pr.title)}\n"
        f"{_credit(event)}"
    )


def _issue(event: Event, issue: IssueDetail) -> str:
    action = event.action or DEFAULT_ACTION
    glyph = ISSUE_GLYPHS.get(action, ISSUE_OTHER_GLYPH)
    return (
        f"{glyph} *Issue {action}* [#{issue.number}]({issue.url})\n"
        f"{escape_markdown(issue.title)}\n"
        f"{_credit(event)}"
    )


def _push(event: Event, push: PushDetail) -> str:
    branch = push.ref_name.removeprefix(BRANCH_REF_PREFIX)
    return (
        f"{PUSH_GLYPH} *Push* to `{branch}`\n"
        f"[Compare]({push.compare_url}) • {push.commit_count} commit(s)\n"
        f"{_credit(event)}"
    )


def _workflow_run(run: WorkflowRunDetail) -> str:
    glyph = WORKFLOW_GLYPHS.get(run.conclusion or "", WORKFLOW_PENDING_GLYPH)
    status = run.conclusion or run.status
    return (
        f"{glyph} *Workflow* `{run.name}`\n"
        f"Branch: `{run.branch}` • Status: {status}\n"
        f"[View Run]({run.url})"
    )


def _release(event: Event, release: ReleaseDetail) -> str:
    if release.draft:
        glyph = RELEASE_DRAFT_GLYPH
    elif release.prerelease:
        glyph = RELEASE_PRERELEASE_GLYPH
    else:
        glyph = RELEASE_PUBLISHED_GLYPH
    return (
        f"{glyph} *Release* `{release.tag}`\n"
        f"{escape_markdown(release.name or release.tag)}\n"
        f"[View Release]({release.url})\n"
        f"{_credit(event)}"
    )


def _unrecognized(event: Event) -> str:
    return (
        f"{UNRECOGNIZED_GLYPH} *{event.kind}* on `{event.repository.full_name}`\n"
        f"{_credit(event)}"
    )


def format_message(event: Event) -> str:
    """Render `event` as a multi-line Markdown message. Never fails."""
    detail = event.detail
    if isinstance(detail, PullRequestDetail):
        return _pull_request(event, detail)
    if isinstance(detail, IssueDetail):
        return _issue(event, detail)
    if isinstance(detail, PushDetail):
        return _push(event, detail)
    if isinstance(detail, WorkflowRunDetail):
        return _workflow_run(detail)
    if isinstance(detail, ReleaseDetail):
        return _release(event, detail)
    if isinstance(detail, UnrecognizedDetail):
        return _unrecognized(event)
    assert_never(detail)
