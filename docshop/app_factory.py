"""Entry point for uvicorn/gunicorn: `uvicorn docshop.app_factory:app`."""
from docshop.app import create_app

app = create_app()

__all__ = ["app", "create_app"]
