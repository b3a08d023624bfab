"""Process entry point — `python -m blog_api` serves the API with uvicorn."""

import uvicorn

from blog_api.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "blog_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
