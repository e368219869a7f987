"""
Runtime settings.

Values come from the environment (or a local .env file) with defaults
suited to running the Streamlit app from the repository root.
"""

import os
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
DATA_DIR = os.path.join(BASE_DIR, "Data")

DATA_PATH = os.getenv("COLLEGES_DATA_PATH", os.path.join(DATA_DIR, "Colleges.json"))
DB_PATH = os.getenv("COLLEGES_DB_PATH", "colleges.db")
TABLE_NAME = "colleges"

# Ranks above this are treated as typos in the search form
MAX_RANK = int(os.getenv("MAX_RANK", "200000"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE")
