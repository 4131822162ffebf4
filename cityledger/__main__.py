"""Run the API with ``python -m cityledger``."""

import uvicorn

from cityledger.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run("cityledger.main:app", host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
