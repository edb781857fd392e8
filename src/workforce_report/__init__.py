"""Workforce Report Builder - workforce spreadsheet exports to paginated reports."""

from workforce_report.api import app, create_app

__all__ = ["app", "create_app"]
__version__ = "0.1.0"


def main() -> None:
    """Run the local FastAPI server using uvicorn."""
    import uvicorn

    from workforce_report.config import settings

    uvicorn.run(
        "workforce_report.api:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.debug,
    )
