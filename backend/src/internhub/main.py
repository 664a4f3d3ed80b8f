"""Main entrypoint

Exposes the ASGI application defined in `presentation.main`. Run locally with:

    uvicorn internhub.main:app --reload

or `python -m internhub.main`. Keep application logic in `application`,
`domain` and `infrastructure`.
"""
from internhub.core.config import settings
from internhub.presentation.main import app

__all__ = ["app"]


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "internhub.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
