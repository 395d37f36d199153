"""Run the API server with uvicorn: ``python -m lockin.server``."""

import uvicorn

from lockin.server.core.config import settings


def main() -> None:
    uvicorn.run(
        "lockin.server.main:app",
        host=settings.server_host,
        port=settings.server_port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
