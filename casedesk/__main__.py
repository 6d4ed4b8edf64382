"""
Run the API server:

  python -m casedesk

HOST and PORT come from the environment (see casedesk.core.config).
"""

import logging

import uvicorn

from casedesk.core.config import get_settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "casedesk.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level="debug" if settings.DEBUG else "info",
    )


if __name__ == "__main__":
    main()
