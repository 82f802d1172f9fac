#!/usr/bin/env python3
# backend/run.py
"""
Local development server.

Seeds the demo catalog and workers into the configured database, then
serves the API with auto-reload.
"""
import logging
import os
from pathlib import Path
import sys

backend_dir = Path(__file__).parent
sys.path.insert(0, str(backend_dir))
os.chdir(backend_dir)

os.environ.setdefault("ENVIRONMENT", "development")

import uvicorn

from carwash.database import SessionLocal, init_db
from carwash.seed import seed_database

logger = logging.getLogger("carwash.run")

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
    db = SessionLocal()
    try:
        seed_database(db)
    finally:
        db.close()

    logger.info("Serving on http://localhost:8000 (docs at /docs)")
    uvicorn.run("carwash.main:app", host="0.0.0.0", port=8000, reload=True, log_level="info")
