"""Run the Munin API with uvicorn: ``python -m munin``."""

import uvicorn

from munin.config import get_settings


def main() -> None:
    """Start the HTTP server on the configured host and port."""
    settings = get_settings()
    uvicorn.run("munin.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
