"""Run the API with uvicorn: ``python -m city_explorer``."""

import uvicorn

from city_explorer.core.config import settings


def main() -> None:
    uvicorn.run("city_explorer.main:app", host="0.0.0.0", port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
