"""Run the relay with uvicorn: `python -m relay`."""

import uvicorn

from relay.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "relay.main:app",
        host=settings.server.host,
        port=settings.server.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
