"""
Global configuration for the JSON node editor
"""
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# Project paths
BASE_DIR = Path(__file__).parent.parent
DATA_DIR = Path(os.getenv("NODE_EDITOR_DATA_DIR", BASE_DIR / "data"))

# Ensure directories exist
DATA_DIR.mkdir(parents=True, exist_ok=True)

# -----------------------------------------------------------------------------
# Document store
# -----------------------------------------------------------------------------
DB_PATH = os.getenv("NODE_EDITOR_DB_PATH", str(DATA_DIR / "documents.db"))
DOCUMENT_SEED_PATH = Path(os.getenv("NODE_EDITOR_SEED_PATH", DATA_DIR / "document.json"))

# -----------------------------------------------------------------------------
# Serialization / display
# -----------------------------------------------------------------------------
JSON_INDENT = 2
ROOT_MARKER = "$"

# Row descriptor types whose value is embedded JSON text, with their zero values
NESTED_ROW_TYPES = {
    "object": dict,
    "array": list,
}

# -----------------------------------------------------------------------------
# API / logging
# -----------------------------------------------------------------------------
API_HOST = os.getenv("NODE_EDITOR_HOST", "0.0.0.0")
API_PORT = int(os.getenv("NODE_EDITOR_PORT", "8000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Template written when a seed document does not exist yet
DOCUMENT_TEMPLATE = "{}"
