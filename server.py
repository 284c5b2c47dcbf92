"""Run the Marketing Mavericks API with uvicorn (PORT defaults to 3000)."""

import logging

import uvicorn

from src.mavericks.api.main import app
from src.mavericks.config import load_settings


def main() -> None:
    settings = load_settings()
    logging.getLogger("mavericks").info(
        "server_starting port=%s environment=%s", settings.port, settings.environment
    )
    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
