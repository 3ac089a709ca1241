"""
Document file I/O operations
"""
import logging
import os
from pathlib import Path
from typing import Union

from node_editor.config import DOCUMENT_SEED_PATH, DOCUMENT_TEMPLATE

logger = logging.getLogger(__name__)


def read_document_text(filepath: Union[str, Path, None] = None) -> str:
    """
    Read a document file as raw text

    Args:
        filepath: Path to the JSON file (defaults to the seed document)

    Returns:
        File contents; the empty template when the file does not exist
        (the template is written so later reads find it)
    """
    if filepath is None:
        filepath = DOCUMENT_SEED_PATH
    filepath = str(filepath)

    if not os.path.exists(filepath):
        write_document_text(DOCUMENT_TEMPLATE, filepath)
        return DOCUMENT_TEMPLATE

    with open(filepath, "r", encoding="utf-8") as f:
        return f.read()


def write_document_text(text: str, filepath: Union[str, Path, None] = None) -> bool:
    """
    Write raw document text to a file

    Args:
        text: Document text, written as-is
        filepath: Path to write to (defaults to the seed document)

    Returns:
        True if successful, False otherwise
    """
    if filepath is None:
        filepath = DOCUMENT_SEED_PATH
    filepath = str(filepath)

    try:
        os.makedirs(os.path.dirname(filepath) if os.path.dirname(filepath) else ".", exist_ok=True)

        with open(filepath, "w", encoding="utf-8") as f:
            f.write(text)

        logger.info(f"Document saved to {filepath}")
        return True

    except OSError as e:
        logger.error(f"Error writing {filepath}: {e}")
        return False
