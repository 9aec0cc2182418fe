from __future__ import annotations

import json

from relay.errors import DeliveryError
from relay.github.signature import SIGNATURE_PREFIX, compute_signature
from relay.providers.base import BaseMessenger

SECRET = "s3cret"


class RecordingMessenger(BaseMessenger):
    """In-memory messenger that records sends and fails for chosen chats."""

    def __init__(self, fail_for: set[int | str] | None = None, crash_for: set[int | str] | None = None) -> None:
        self.fail_for = fail_for or set()
        self.crash_for = crash_for or set()
        self.attempts: list[int | str] = []
        self.sent: list[tuple[int | str, str]] = []

    @property
    def provider_name(self) -> str:
        return "recording"

    @property
    def configured(self) -> bool:
        return True

    async def send(self, destination: int | str, text: str) -> None:
        self.attempts.append(destination)
        if destination in self.fail_for:
            raise DeliveryError(destination, "simulated outage")
        if destination in self.crash_for:
            raise RuntimeError("boom")
        self.sent.append((destination, text))


def repo(full_name: str = "acme/widgets") -> dict:
    return {"full_name": full_name, "html_url": f"https://github.com/{full_name}"}


def sender(login: str = "alice") -> dict:
    return {"login": login, "html_url": f"https://github.com/{login}"}


def pull_request_payload(
    action: str = "opened",
    merged: bool | None = None,
    full_name: str = "acme/widgets",
) -> dict:
    return {
        "action": action,
        "repository": repo(full_name),
        "sender": sender(),
        "pull_request": {
            "number": 42,
            "title": "Fix bug",
            "html_url": f"https://github.com/{full_name}/pull/42",
            "state": "closed" if action == "closed" else "open",
            "merged": merged,
            "base": {"ref": "main"},
        },
    }


def issue_payload(action: str = "opened") -> dict:
    return {
        "action": action,
        "repository": repo(),
        "sender": sender(),
        "issue": {
            "number": 7,
            "title": "Widgets wobble",
            "html_url": "https://github.com/acme/widgets/issues/7",
            "state": "open",
        },
    }


def push_payload(ref: str = "refs/heads/main", commits: int = 3) -> dict:
    return {
        "ref": ref,
        "compare": "https://github.com/acme/widgets/compare/abc...def",
        "commits": [
            {"id": f"c{i}", "message": f"commit {i}", "url": "", "author": {"name": "alice"}}
            for i in range(commits)
        ],
        "repository": repo(),
        "sender": sender(),
    }


def workflow_run_payload(status: str = "completed", conclusion: str | None = "success") -> dict:
    return {
        "action": "completed",
        "repository": repo(),
        "sender": sender(),
        "workflow_run": {
            "id": 99,
            "name": "CI",
            "status": status,
            "conclusion": conclusion,
            "html_url": "https://github.com/acme/widgets/actions/runs/99",
            "head_branch": "main",
        },
    }


def release_payload(draft: bool = False, prerelease: bool = False, name: str | None = "Version 1") -> dict:
    return {
        "action": "published",
        "repository": repo(),
        "sender": sender(),
        "release": {
            "tag_name": "v1.0.0",
            "name": name,
            "html_url": "https://github.com/acme/widgets/releases/tag/v1.0.0",
            "draft": draft,
            "prerelease": prerelease,
        },
    }


def encode(payload: dict) -> bytes:
    return json.dumps(payload).encode("utf-8")


def sign(body: bytes, secret: str = SECRET) -> str:
    return SIGNATURE_PREFIX + compute_signature(secret.encode("utf-8"), body)
