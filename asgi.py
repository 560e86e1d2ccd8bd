"""
asgi.py -- ASGI entry point for RentCar.

Run with:  uvicorn asgi:app --reload

Static car images are served from ./uploads under /resources when that
directory exists. The API only ever stores URLs into this area.
"""

from pathlib import Path

from fastapi.staticfiles import StaticFiles

from api.main import app

_UPLOADS_DIR = Path(__file__).resolve().parent / "uploads"

if _UPLOADS_DIR.is_dir():
    app.mount("/resources", StaticFiles(directory=_UPLOADS_DIR), name="resources")
