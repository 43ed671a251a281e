"""uvicorn entry point: ``nestegg-api`` or ``python -m nestegg.api.server``."""

from __future__ import annotations

import uvicorn

from nestegg.api.app import create_app
from nestegg.core.config import AppSettings
from nestegg.core.log import configure_logging


def main() -> None:
    settings = AppSettings()
    configure_logging(settings.log_level)
    uvicorn.run(create_app(settings), host=settings.api.host, port=settings.api.port)


if __name__ == "__main__":
    main()
