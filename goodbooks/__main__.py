"""Run the API with uvicorn: ``python -m goodbooks``."""

import uvicorn

from goodbooks.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "goodbooks.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
    )


if __name__ == "__main__":
    main()
