"""Run the service with uvicorn: python -m ems"""

import uvicorn

from ems.config import settings


def main() -> None:
    uvicorn.run(
        "ems.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
