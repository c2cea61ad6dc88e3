"""
Steep API - main entry point.

Run with `steep` (console script) or `uvicorn steep.api.app:app`.
"""

from __future__ import annotations

import uvicorn

from steep.config import get_settings


def main():
    """Serve the API on the configured host and port."""
    settings = get_settings()
    uvicorn.run(
        "steep.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
