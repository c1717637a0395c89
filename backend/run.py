#!/usr/bin/env python3
# backend/run.py
"""
Development server runner for the Studiobook API.
"""
from pathlib import Path
import sys

# Add backend to path
backend_dir = Path(__file__).parent
sys.path.insert(0, str(backend_dir))

import uvicorn  # noqa: E402

from studiobook.core.config import settings  # noqa: E402

if __name__ == "__main__":
    print("Starting Studiobook development server")
    print("Access at: http://localhost:8000")
    print("API Docs: http://localhost:8000/docs")

    uvicorn.run(
        "studiobook.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level=settings.log_level.lower(),
    )
