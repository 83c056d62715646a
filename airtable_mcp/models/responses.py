"""
Response models for MCP Server HTTP API
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel
from mcp.types import Tool, TextContent


class ToolCallResponse(BaseModel):
    """Response model for HTTP tool calls"""
    result: List[TextContent]
    success: bool
    error: Optional[str] = None


class ToolListResponse(BaseModel):
    """Response model for listing available tools"""
    tools: List[Tool]


class RecordResponse(BaseModel):
    id: str
    fields: Dict[str, Any]
    createdTime: Optional[str] = None


class DeletedRecordResponse(BaseModel):
    id: str
    deleted: bool = True


class ErrorResponse(BaseModel):
    error: str
    details: Optional[Dict[str, Any]] = None
