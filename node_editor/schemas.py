"""
Request / response models for the node editor API
"""
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, StrictInt, StrictStr

# StrictInt first so 0 stays an index and "0" stays a key
PathSegmentField = Union[StrictInt, StrictStr]


class RowDescriptor(BaseModel):
    """One field of an object node as shown in the editor's row view"""
    key: Optional[str] = Field("", description="Field name; rows without a key are skipped")
    type: str = Field("string", description="string | number | boolean | null | object | array")
    value: Any = Field(None, description="Field value; object/array rows carry JSON text")


class NodeData(BaseModel):
    """The selected node as supplied by the tree/graph view"""
    path: List[PathSegmentField] = Field(default_factory=list)
    text: List[RowDescriptor] = Field(default_factory=list)


class NormalizeRequest(BaseModel):
    rows: Optional[List[RowDescriptor]] = None


class NormalizeResponse(BaseModel):
    json_text: str = Field(..., alias="json")
    data: Dict[str, Any]

    class Config:
        populate_by_name = True


class FormatPathRequest(BaseModel):
    path: Optional[List[PathSegmentField]] = None


class DocumentUpdateRequest(BaseModel):
    """Replace a stored document with new raw text"""
    text: str
    summary: Optional[str] = None


class SaveNodeRequest(BaseModel):
    """
    Save an edited node

    Either `data` (the partial value) or `rows` (normalized into the partial
    value) must be given; `data` wins when both are present.
    """
    path: List[PathSegmentField] = Field(..., description="Keys / indices of the edited node")
    data: Optional[Any] = None
    rows: Optional[List[RowDescriptor]] = None
    summary: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "path": ["fruits", 0],
                "data": {"color": "green", "details": {"type": "fruit"}},
                "summary": "Recolor apple",
            }
        }


class DocumentResponse(BaseModel):
    document_id: str
    version: int
    text: str
    node_path: Optional[str] = None
    message: Optional[str] = None
