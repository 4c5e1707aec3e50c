import uvicorn

from shaka_api.core.config import settings


def main() -> None:
    uvicorn.run(
        "shaka_api.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.debug
    )


if __name__ == "__main__":
    main()
