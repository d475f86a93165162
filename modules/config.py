"""
Environment configuration.

Values come from the process environment, with a .env file in the working
directory loaded first by python-dotenv.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv


load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent

PERSISTENCE_BACKEND = os.getenv("PERSISTENCE_BACKEND", "")
MONGODB_URI = os.getenv("MONGODB_URI", "")
MONGODB_DB = os.getenv("MONGODB_DB", "DSCSA")

DATA_DIR = Path(os.getenv("DATA_DIR", str(BASE_DIR / "data")))
EXPORTS_DIR = Path(os.getenv("EXPORTS_DIR", str(BASE_DIR / "exports")))

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:3000")
API_KEY = os.getenv("API_KEY", "")
API_TIMEOUT = float(os.getenv("API_TIMEOUT", "10"))
