"""
Tool registry
Maps tool names to their request model and handler, and declares them to MCP clients
"""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type

from mcp.types import Tool
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..context import ServiceContext
from ..errors import UnknownToolError, ValidationError
from ..models import (
    BaseRequest,
    CreateRecordRequest,
    ListBasesRequest,
    ListRecordsRequest,
    RecordRequest,
    SearchRecordsRequest,
    TableRequest,
    UpdateRecordRequest,
)
from .record_handlers import (
    handle_create_record,
    handle_delete_record,
    handle_get_record,
    handle_list_records,
    handle_update_record,
)
from .search_handlers import handle_search_records
from .table_handlers import handle_describe_table, handle_list_bases, handle_list_tables

logger = logging.getLogger(__name__)

Handler = Callable[[ServiceContext, Any], Awaitable[Any]]


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    request_model: Type[BaseModel]
    handler: Handler

    def to_tool(self) -> Tool:
        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.request_model.model_json_schema(by_alias=True),
        )


TOOLS: List[ToolSpec] = [
    ToolSpec("list-bases", "List all Airtable bases accessible with the configured token",
             ListBasesRequest, handle_list_bases),
    ToolSpec("list-tables", "List all tables in an Airtable base, with their fields",
             BaseRequest, handle_list_tables),
    ToolSpec("describe-table", "Get the field schema of one table, by table ID or name",
             TableRequest, handle_describe_table),
    ToolSpec("list-records", "List records from an Airtable table",
             ListRecordsRequest, handle_list_records),
    ToolSpec("get-record", "Get a specific record from an Airtable table by ID",
             RecordRequest, handle_get_record),
    ToolSpec("create-record", "Create a new record in an Airtable table",
             CreateRecordRequest, handle_create_record),
    ToolSpec("update-record", "Update an existing record in an Airtable table",
             UpdateRecordRequest, handle_update_record),
    ToolSpec("delete-record", "Delete a record from an Airtable table",
             RecordRequest, handle_delete_record),
    ToolSpec("search-records", "Search for records in an Airtable table (case-insensitive text match)",
             SearchRecordsRequest, handle_search_records),
]

TOOL_INDEX: Dict[str, ToolSpec] = {spec.name: spec for spec in TOOLS}


def tool_definitions() -> List[Tool]:
    return [spec.to_tool() for spec in TOOLS]


def parse_arguments(model: Type[BaseModel], arguments: Optional[Dict[str, Any]]) -> BaseModel:
    """Validate raw arguments into ``model``; failures become ValidationError"""
    try:
        return model.model_validate(arguments or {})
    except PydanticValidationError as e:
        problems = e.errors(include_url=False, include_context=False, include_input=False)
        summary = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'arguments'}: {err['msg']}" for err in problems
        )
        raise ValidationError(f"Invalid arguments: {summary}", {"errors": problems}) from e


async def call_tool(context: ServiceContext, name: str, arguments: Optional[Dict[str, Any]]) -> Any:
    """Validate arguments and run the named tool's handler.

    Raises UnknownToolError, ValidationError, or whatever the handler raises.
    """
    spec = TOOL_INDEX.get(name)
    if spec is None:
        raise UnknownToolError(name)

    request = parse_arguments(spec.request_model, arguments)
    return await spec.handler(context, request)
