#!/usr/bin/env python3
"""
Signed Test Webhook Sender

Sends a sample GitHub `pull_request.opened` webhook, signed with the
configured secret, to a running relay. Useful for checking routing and
Telegram delivery end to end without touching GitHub.

Usage:
    python scripts/send_test_event.py [relay-url] [repository]

Defaults:
    relay-url   http://localhost:8080/webhook/github
    repository  acme/widgets
"""

import asyncio
import json
import sys
from pathlib import Path

# Add parent directory to path so we can import from relay
sys.path.insert(0, str(Path(__file__).parent.parent))

import httpx
from dotenv import load_dotenv

from relay.config import Settings
from relay.github.signature import SIGNATURE_HEADER, SIGNATURE_PREFIX, compute_signature

# Load environment variables
load_dotenv()

DEFAULT_URL = "http://localhost:8080/webhook/github"
DEFAULT_REPOSITORY = "acme/widgets"


def sample_payload(repository: str) -> dict:
    owner = repository.split("/")[0]
    return {
        "action": "opened",
        "repository": {
            "full_name": repository,
            "html_url": f"https://github.com/{repository}",
        },
        "sender": {"login": owner, "html_url": f"https://github.com/{owner}"},
        "pull_request": {
            "number": 1,
            "title": "Relay test event",
            "html_url": f"https://github.com/{repository}/pull/1",
            "state": "open",
            "merged": None,
            "base": {"ref": "main"},
        },
    }


async def main():
    url = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_URL
    repository = sys.argv[2] if len(sys.argv) > 2 else DEFAULT_REPOSITORY

    secret = Settings().github.webhook_secret
    if not secret:
        print("ERROR: APP_GITHUB__WEBHOOK_SECRET is not set (check .env or config.toml)")
        sys.exit(1)

    body = json.dumps(sample_payload(repository)).encode("utf-8")
    headers = {
        "Content-Type": "application/json",
        "X-GitHub-Event": "pull_request",
        SIGNATURE_HEADER: SIGNATURE_PREFIX + compute_signature(secret.encode("utf-8"), body),
    }

    print(f"Sending pull_request.opened for {repository} to {url}")

    try:
        async with httpx.AsyncClient(timeout=30.0) as client:
            response = await client.post(url, content=body, headers=headers)
    except httpx.HTTPError as e:
        print("ERROR:", str(e))
        print()
        print("Is the relay running? Start it with: python -m relay")
        sys.exit(1)

    print(f"Status: {response.status_code}")
    print(response.text)
    if not response.is_success:
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
