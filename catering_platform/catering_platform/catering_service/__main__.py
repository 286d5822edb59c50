import uvicorn

from .config import settings


def main() -> None:
    uvicorn.run(
        "catering_platform.catering_platform.catering_service.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=False,
    )


if __name__ == "__main__":
    main()
