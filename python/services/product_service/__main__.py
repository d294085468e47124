"""Run the product service with uvicorn."""

from __future__ import annotations

import uvicorn

from product_service.app import create_app
from product_service.logging_setup import configure_logging
from product_service.settings import get_settings


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    # log_config=None keeps uvicorn's records flowing through the loguru interceptor
    uvicorn.run(
        create_app(settings=settings),
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
