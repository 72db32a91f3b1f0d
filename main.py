import uvicorn

from app.core.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "app.core.app:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
