"""
MCP Server Models Package
Contains request/response models for type safety
"""

from .requests import *
from .responses import *

__all__ = [
    "ToolCallRequest",
    "ListBasesRequest",
    "BaseRequest",
    "TableRequest",
    "RecordRequest",
    "SortSpec",
    "ListRecordsRequest",
    "CreateRecordRequest",
    "UpdateRecordRequest",
    "SearchRecordsRequest",
    "CompletionRequest",
    "ToolCallResponse",
    "ToolListResponse",
    "RecordResponse",
    "DeletedRecordResponse",
    "ErrorResponse",
]
