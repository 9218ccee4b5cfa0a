"""Run the API with uvicorn: ``python -m rankings``."""

import uvicorn

from rankings.config import settings


def main() -> None:
    uvicorn.run(
        "rankings.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_config=None,  # logging is configured by rankings.core.logging
    )


if __name__ == "__main__":
    main()
