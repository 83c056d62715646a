"""
Request models for MCP tools and HTTP routes
Arguments use Airtable-style camelCase names; snake_case is accepted too
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ToolCallRequest(BaseModel):
    """Request model for HTTP tool calls"""
    name: str
    arguments: Dict[str, Any] = Field(default_factory=dict)


class AirtableRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ListBasesRequest(AirtableRequest):
    pass


class BaseRequest(AirtableRequest):
    base_id: str = Field(..., alias="baseId", min_length=1, description="ID of the Airtable base")


class TableRequest(BaseRequest):
    table_id_or_name: str = Field(
        ..., alias="tableIdOrName", min_length=1, description="ID or name of the table"
    )


class RecordRequest(TableRequest):
    record_id: str = Field(..., alias="recordId", min_length=1, description="ID of the record")


class SortSpec(AirtableRequest):
    field: str = Field(..., min_length=1)
    direction: Literal["asc", "desc"] = "asc"


class ListRecordsRequest(TableRequest):
    max_records: Optional[int] = Field(
        None, alias="maxRecords", ge=1, description="Maximum number of records to return (default: 100)"
    )
    view: Optional[str] = Field(None, description="Name or ID of a view to use")
    sort: Optional[List[SortSpec]] = Field(None, description="Sorting options")
    fields: Optional[List[str]] = Field(
        None, description="Field names to retrieve; all fields when omitted"
    )
    filter_by_formula: Optional[str] = Field(
        None, alias="filterByFormula", description="Airtable formula used to filter records"
    )


class CreateRecordRequest(TableRequest):
    fields: Dict[str, Any] = Field(..., description="Fields and values for the new record")


class UpdateRecordRequest(RecordRequest):
    fields: Dict[str, Any] = Field(..., description="Fields and values to update")


class SearchRecordsRequest(TableRequest):
    search_term: str = Field(..., alias="searchTerm", min_length=1, description="Text to search for in records")
    field_ids: Optional[List[str]] = Field(
        None,
        alias="fieldIds",
        description="Field IDs to search in; all text-like fields when omitted",
    )
    field_names: Optional[List[str]] = Field(
        None,
        alias="fieldNames",
        description="Field names to search in; when given, Airtable evaluates the search as a formula",
    )
    max_records: Optional[int] = Field(
        None, alias="maxRecords", ge=1, description="Maximum number of records to return (default: 100)"
    )


class CompletionRequest(BaseModel):
    """Chat-completion payload; unknown keys are forwarded untouched"""
    model_config = ConfigDict(extra="allow")

    model: str
    messages: List[Dict[str, Any]] = Field(..., min_length=1)
    max_tokens: Optional[int] = Field(None, ge=1)
