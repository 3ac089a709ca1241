import os
import sys
import tempfile
from pathlib import Path

import pytest

# Keep the module-level store and seed files out of the working tree
os.environ.setdefault("NODE_EDITOR_DATA_DIR", tempfile.mkdtemp(prefix="node_editor_"))

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from node_store.database import DocumentDB


@pytest.fixture
def test_db(tmp_path):
    """Document database in a per-test temp file"""
    return DocumentDB(db_path=str(tmp_path / "test_documents.db"))


@pytest.fixture
def fruit_document():
    """Sample document with an array of objects"""
    return {
        "fruits": [
            {
                "name": "Apple",
                "color": "red",
                "details": {"type": "Pome", "season": "Fall"},
                "nutrients": {"calories": 95, "fiber": "4g", "vitaminC": "8.4mg"},
            },
            {"name": "Banana", "color": "yellow"},
        ]
    }
