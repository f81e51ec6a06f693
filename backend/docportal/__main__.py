"""Run the document portal API with uvicorn."""

import logging

import uvicorn

from docportal.config import settings


def main():
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger("docportal").info("Server listening on http://%s:%s", settings.host, settings.port)
    uvicorn.run(
        "docportal.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
