"""Run the relay with uvicorn: ``python -m relay``."""
import uvicorn

from relay.config.settings import settings


def run():
    uvicorn.run(
        "relay.main:app",
        host=settings.API_HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
