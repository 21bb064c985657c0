"""Casino Mafia API entrypoint."""

from __future__ import annotations

import uvicorn

from casino_mafia_backend.api import create_api
from casino_mafia_backend.settings import get_settings

app = create_api()


def _run_uvicorn(*, reload: bool) -> None:
    config = get_settings()
    uvicorn.run(
        "casino_mafia_backend.main:app",
        host=config.api_host,
        port=config.api_port,
        reload=reload,
    )


def run_dev() -> None:
    """Serve with auto-reload for local development."""
    _run_uvicorn(reload=True)


def run_prod() -> None:
    _run_uvicorn(reload=False)
