"""
API routes for viewing and editing document nodes
"""
import logging
from typing import Any, Dict, List

from fastapi import APIRouter, HTTPException, Path

from node_editor.config import DATA_DIR, DB_PATH
from node_editor.schemas import (
    DocumentResponse,
    DocumentUpdateRequest,
    FormatPathRequest,
    NodeData,
    NormalizeRequest,
    NormalizeResponse,
    SaveNodeRequest,
)
from node_editor.services.json_io import read_document_text, write_document_text
from node_editor.services.normalizer import normalize_node_data, normalize_rows
from node_editor.services.path_format import json_path_to_string
from node_editor.services.tree_patcher import save_node
from node_store.database import DocumentDB, DocumentVersion

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["node"])

db = DocumentDB(db_path=DB_PATH)


# ============================================================================
# Helper Functions
# ============================================================================

def _export_path(document_id: str):
    return DATA_DIR / f"{document_id}.json"


def _load_current(document_id: str) -> DocumentVersion:
    """Latest stored version; the first access seeds version 1 from the seed file"""
    current = db.get_current_version(document_id)
    if current is None:
        current = db.save_version(
            document_id=document_id,
            data=read_document_text(),
            modification_summary="Load from file",
        )
    return current


def _to_response(version: DocumentVersion, message: str = None) -> DocumentResponse:
    return DocumentResponse(
        document_id=version.document_id,
        version=version.version,
        text=version.data,
        node_path=version.node_path,
        message=message,
    )


# ============================================================================
# Node view endpoints (pure, no storage)
# ============================================================================

@router.post("/node/normalize", response_model=NormalizeResponse)
async def normalize_node(req: NormalizeRequest):
    """Turn a node's row descriptors into its JSON value"""
    return NormalizeResponse(
        json_text=normalize_node_data(req.rows),
        data=normalize_rows(req.rows),
    )


@router.post("/node/path")
async def format_node_path(req: FormatPathRequest):
    """Display form of a node path, e.g. $["customer"][0]"""
    return {"path": json_path_to_string(req.path)}


@router.post("/node/view")
async def view_node(node: NodeData):
    """Content and path of a selected node, as shown before editing"""
    return {
        "content": normalize_node_data(node.text),
        "path": json_path_to_string(node.path),
    }


# ============================================================================
# Document endpoints
# ============================================================================

@router.get("/documents", response_model=List[Dict[str, Any]])
async def list_documents():
    """List stored documents with version counts"""
    return db.list_documents()


@router.get("/documents/{document_id}", response_model=DocumentResponse)
async def get_document(document_id: str):
    """Get the current text of a document"""
    return _to_response(_load_current(document_id))


@router.put("/documents/{document_id}", response_model=DocumentResponse)
async def replace_document(document_id: str, req: DocumentUpdateRequest):
    """Store new raw text for a document as its next version"""
    version = db.save_version(
        document_id=document_id,
        data=req.text,
        modification_summary=req.summary or "Replace document",
    )
    write_document_text(req.text, _export_path(document_id))
    return _to_response(version, message=f"Document {document_id} replaced")


@router.post("/documents/{document_id}/node", response_model=DocumentResponse)
async def save_document_node(document_id: str, req: SaveNodeRequest):
    """
    Save an edited node into the current document

    The partial value is merged into the node stored at `path`. Fields of the
    stored node that the edit does not mention are kept.

    Returns 422 with the failure reason when the stored document is not valid
    JSON or the path does not fit it; nothing is written in that case.
    """
    if "data" in req.model_fields_set:
        new_data = req.data
    elif req.rows is not None:
        new_data = normalize_rows(req.rows)
    else:
        raise HTTPException(status_code=400, detail="Either data or rows is required")

    node_path = json_path_to_string(req.path)
    current = _load_current(document_id)

    result = save_node(current.data, req.path, new_data)
    if not result.success:
        logger.error(f"Failed to save {document_id} at {node_path}: {result.error}")
        raise HTTPException(status_code=422, detail=result.error)

    version = db.save_version(
        document_id=document_id,
        data=result.document,
        modification_summary=req.summary or f"Edit node {node_path}",
        node_path=node_path,
    )
    write_document_text(result.document, _export_path(document_id))
    logger.info(f"Saved {document_id} v{version.version} at {node_path}")

    return _to_response(version, message="Changes saved successfully")


@router.get("/documents/{document_id}/history", response_model=List[Dict[str, Any]])
async def get_history(document_id: str):
    """Summaries of every stored version of a document"""
    history = db.get_modification_history(document_id)
    if not history:
        raise HTTPException(status_code=404, detail=f"No history found for document: {document_id}")
    return history


@router.get("/documents/{document_id}/versions/{version}", response_model=DocumentResponse)
async def get_specific_version(
    document_id: str,
    version: int = Path(..., ge=1, description="Version number"),
):
    """Retrieve one stored version of a document"""
    stored = db.get_version(document_id, version)
    if stored is None:
        raise HTTPException(
            status_code=404,
            detail=f"Version {version} not found for document: {document_id}",
        )
    return _to_response(stored)


@router.post("/documents/{document_id}/reset/{version}", response_model=DocumentResponse)
async def reset_version(
    document_id: str,
    version: int = Path(..., ge=1, description="Version to restore"),
):
    """Store an earlier version's text as the newest version"""
    stored = db.get_version(document_id, version)
    if stored is None:
        raise HTTPException(
            status_code=404,
            detail=f"Version {version} not found for document: {document_id}",
        )

    message = f"Reset to version {version} for {document_id} successful"
    restored = db.save_version(
        document_id=document_id,
        data=stored.data,
        modification_summary=message,
    )
    write_document_text(stored.data, _export_path(document_id))
    return _to_response(restored, message=message)
