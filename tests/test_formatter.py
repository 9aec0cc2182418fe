"""Tests for Telegram message formatting."""

import pytest

from relay.github.events import Actor, Event, PushDetail, Repository, UnrecognizedDetail
from relay.github.formatter import format_message
from relay.github.normalizer import parse_event
from tests.fakes import (
    encode,
    issue_payload,
    pull_request_payload,
    push_payload,
    release_payload,
    workflow_run_payload,
)

CREDIT = "_by [alice](https://github.com/alice)_"


def _pr(action: str, merged: bool | None = None) -> str:
    return format_message(parse_event("pull_request", encode(pull_request_payload(action, merged))))


def test_pull_request_opened():
    assert _pr("opened") == (
        "🆕 *Pull Request opened* [#42](https://github.com/acme/widgets/pull/42)\n"
        "`main` → Fix bug\n"
        f"{CREDIT}"
    )


def test_merged_pull_request_uses_merge_glyph():
    message = _pr("closed", merged=True)
    assert message.startswith("🔀 *Pull Request closed*")
    assert "❌" not in message


def test_closed_unmerged_pull_request():
    assert _pr("closed", merged=False).startswith("❌ *Pull Request closed*")
    assert _pr("closed", merged=None).startswith("❌ ")


@pytest.mark.parametrize(
    "action, glyph",
    [("reopened", "🔄"), ("synchronize", "📦"), ("edited", "📝"), ("labeled", "📝")],
)
def test_pull_request_glyphs(action, glyph):
    assert _pr(action).startswith(f"{glyph} *Pull Request {action}*")


def test_pull_request_without_action_reads_updated():
    payload = pull_request_payload()
    del payload["action"]
    message = format_message(parse_event("pull_request", encode(payload)))
    assert message.startswith("📝 *Pull Request updated*")


@pytest.mark.parametrize(
    "action, glyph",
    [("opened", "🐛"), ("closed", "✅"), ("reopened", "🔄"), ("assigned", "📋")],
)
def test_issue_glyphs(action, glyph):
    message = format_message(parse_event("issues", encode(issue_payload(action))))
    assert message == (
        f"{glyph} *Issue {action}* [#7](https://github.com/acme/widgets/issues/7)\n"
        "Widgets wobble\n"
        f"{CREDIT}"
    )


def test_push_strips_ref_prefix():
    message = format_message(parse_event("push", encode(push_payload("refs/heads/feature/x", commits=3))))
    assert message == (
        "⬆️ *Push* to `feature/x`\n"
        "[Compare](https://github.com/acme/widgets/compare/abc...def) • 3 commit(s)\n"
        f"{CREDIT}"
    )


def test_push_to_tag_keeps_ref():
    message = format_message(parse_event("push", encode(push_payload("refs/tags/v1"))))
    assert "`refs/tags/v1`" in message


@pytest.mark.parametrize(
    "conclusion, glyph",
    [("success", "✅"), ("failure", "❌"), ("cancelled", "🚫"), ("skipped", "⏳")],
)
def test_workflow_glyphs(conclusion, glyph):
    message = format_message(parse_event("workflow_run", encode(workflow_run_payload(conclusion=conclusion))))
    assert message == (
        f"{glyph} *Workflow* `CI`\n"
        f"Branch: `main` • Status: {conclusion}\n"
        "[View Run](https://github.com/acme/widgets/actions/runs/99)"
    )


def test_pending_workflow_shows_status_and_no_actor():
    payload = workflow_run_payload(status="in_progress", conclusion=None)
    message = format_message(parse_event("workflow_run", encode(payload)))
    assert message.startswith("⏳ ")
    assert "Status: in_progress" in message
    assert "_by" not in message


def test_release_published():
    message = format_message(parse_event("release", encode(release_payload())))
    assert message == (
        "🏷️ *Release* `v1.0.0`\n"
        "Version 1\n"
        "[View Release](https://github.com/acme/widgets/releases/tag/v1.0.0)\n"
        f"{CREDIT}"
    )


def test_release_draft_wins_over_prerelease():
    message = format_message(parse_event("release", encode(release_payload(draft=True, prerelease=True))))
    assert message.startswith("📝 ")


def test_release_prerelease():
    message = format_message(parse_event("release", encode(release_payload(prerelease=True))))
    assert message.startswith("🧪 ")


def test_release_name_falls_back_to_tag():
    message = format_message(parse_event("release", encode(release_payload(name=None))))
    assert message.splitlines()[1] == "v1.0.0"


def test_unrecognized_event():
    body = encode({"action": "created", "repository": {"full_name": "acme/widgets"}, "sender": {"login": "bob"}})
    message = format_message(parse_event("discussion", body))
    assert message == "📡 *discussion* on `acme/widgets`\n_by [bob](https://github.com)_"


def test_unrecognized_with_fallbacks():
    event = Event(kind="mystery")
    assert format_message(event) == "📡 *mystery* on `unknown/repository`\n_by [unknown](https://github.com)_"


def test_format_is_deterministic():
    event = Event(
        kind="push",
        repository=Repository(full_name="acme/widgets", html_url="https://github.com/acme/widgets"),
        actor=Actor(login="alice", html_url="https://github.com/alice"),
        detail=PushDetail(ref_name="refs/heads/main", compare_url="https://example.test", commit_count=1),
    )
    assert format_message(event) == format_message(event)
    assert format_message(Event(kind="x", detail=UnrecognizedDetail())) == format_message(Event(kind="x"))


def test_release_empty_name_falls_back_to_tag():
    message = format_message(parse_event("release", encode(release_payload(name=""))))
    assert message.splitlines()[1] == "v1.0.0"


def test_titles_are_markdown_escaped():
    payload = pull_request_payload()
    payload["pull_request"]["title"] = "Rename user_id in *core* [draft] `cfg`"
    message = format_message(parse_event("pull_request", encode(payload)))

    assert message.splitlines()[1] == r"`main` → Rename user\_id in \*core\* \[draft] \`cfg\`"
    assert message.splitlines()[2] == CREDIT


def test_issue_and_release_text_escaped():
    payload = issue_payload()
    payload["issue"]["title"] = "snake_case"
    assert format_message(parse_event("issues", encode(payload))).splitlines()[1] == r"snake\_case"

    message = format_message(parse_event("release", encode(release_payload(name="v2_final"))))
    assert message.splitlines()[1] == r"v2\_final"
