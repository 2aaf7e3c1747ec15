"""Run the calorie tracker with uvicorn."""

import uvicorn

from calorie_tracker.config import Settings


def main() -> None:
    """Serve the ASGI app on the configured host and port."""
    settings = Settings()
    uvicorn.run(
        "calorie_tracker.api.asgi:app",
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "local",
    )


if __name__ == "__main__":
    main()
