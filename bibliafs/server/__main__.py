"""Run the API server with uvicorn: ``python -m bibliafs.server``."""

import uvicorn

from bibliafs.server.core.config import settings


def run() -> None:
    uvicorn.run(
        "bibliafs.server.main:app",
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
