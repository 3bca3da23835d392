"""FastAPI application factory."""
from fastapi import FastAPI

from activity_overview.api.routes import overview


def create_app() -> FastAPI:
    """Build and return the FastAPI app."""
    app = FastAPI(
        title="Activity Overview API",
        description="Activity score and daily insight for the overview dashboard",
        version="0.1.0",
    )

    app.include_router(overview.router, prefix="/overview", tags=["overview"])

    return app


# Module-level app instance for uvicorn
app = create_app()
