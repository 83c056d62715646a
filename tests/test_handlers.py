"""Tests for the tool registry: argument validation, dispatch and tool declarations."""

import pytest

from airtable_mcp.errors import MissingFieldNamesError, UnknownToolError, ValidationError
from airtable_mcp.handlers import TOOLS, call_tool, parse_arguments, tool_definitions
from airtable_mcp.models import ListRecordsRequest


class TestToolDefinitions:
    def test_all_tools_declared(self) -> None:
        names = [tool.name for tool in tool_definitions()]
        assert names == [
            "list-bases",
            "list-tables",
            "describe-table",
            "list-records",
            "get-record",
            "create-record",
            "update-record",
            "delete-record",
            "search-records",
        ]

    def test_schemas_use_camel_case(self) -> None:
        tools = {tool.name: tool for tool in tool_definitions()}
        schema = tools["search-records"].inputSchema
        assert schema["type"] == "object"
        assert set(schema["required"]) == {"baseId", "tableIdOrName", "searchTerm"}
        assert {"fieldIds", "fieldNames", "maxRecords"} <= set(schema["properties"])

    def test_every_tool_has_description(self) -> None:
        assert all(spec.description for spec in TOOLS)


class TestParseArguments:
    def test_snake_case_accepted(self) -> None:
        request = parse_arguments(ListRecordsRequest, {"base_id": "appTEST", "table_id_or_name": "Products"})
        assert request.base_id == "appTEST"
        assert request.max_records is None

    def test_missing_required(self) -> None:
        with pytest.raises(ValidationError) as excinfo:
            parse_arguments(ListRecordsRequest, {"baseId": "appTEST"})
        assert "tableIdOrName" in excinfo.value.message

    def test_bad_sort_direction(self) -> None:
        with pytest.raises(ValidationError):
            parse_arguments(
                ListRecordsRequest,
                {"baseId": "appTEST", "tableIdOrName": "Products", "sort": [{"field": "Name", "direction": "up"}]},
            )

    def test_max_records_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            parse_arguments(ListRecordsRequest, {"baseId": "appTEST", "tableIdOrName": "Products", "maxRecords": 0})


class TestCallTool:
    @pytest.mark.asyncio
    async def test_unknown_tool(self, context) -> None:
        with pytest.raises(UnknownToolError):
            await call_tool(context, "drop-table", {})

    @pytest.mark.asyncio
    async def test_validation_error_makes_no_remote_call(self, context, fake_airtable) -> None:
        with pytest.raises(ValidationError):
            await call_tool(context, "get-record", {"baseId": "appTEST", "tableIdOrName": "Products"})
        assert fake_airtable.requests == []

    @pytest.mark.asyncio
    async def test_list_records_passes_sort(self, context, fake_airtable) -> None:
        result = await call_tool(
            context,
            "list-records",
            {"baseId": "appTEST", "tableIdOrName": "Products", "sort": [{"field": "Name", "direction": "desc"}]},
        )

        assert [r["id"] for r in result] == ["rec1", "rec2"]
        params = fake_airtable.requests[-1].url.params
        assert params["sort[0][field]"] == "Name"
        assert params["sort[0][direction]"] == "desc"

    @pytest.mark.asyncio
    async def test_describe_table(self, context) -> None:
        table = await call_tool(context, "describe-table", {"baseId": "appTEST", "tableIdOrName": "Products"})
        assert table["id"] == "tblProducts"

    @pytest.mark.asyncio
    async def test_search_without_field_names_filters_locally(self, context, fake_airtable) -> None:
        result = await call_tool(
            context,
            "search-records",
            {"baseId": "appTEST", "tableIdOrName": "Products", "searchTerm": "red", "fieldIds": ["fldTags"]},
        )

        assert [r["id"] for r in result] == ["rec1"]
        paths = [r.url.path for r in fake_airtable.requests]
        assert paths == ["/v0/meta/bases/appTEST/tables", "/v0/appTEST/Products"]
        assert "filterByFormula" not in fake_airtable.requests[-1].url.params

    @pytest.mark.asyncio
    async def test_search_with_field_names_uses_formula(self, context, fake_airtable) -> None:
        await call_tool(
            context,
            "search-records",
            {"baseId": "appTEST", "tableIdOrName": "Products", "searchTerm": "red", "fieldNames": ["Name", "Tags"]},
        )

        params = fake_airtable.requests[-1].url.params
        assert params["filterByFormula"] == (
            'OR(FIND(LOWER("red"), LOWER({Name})), FIND(LOWER("red"), LOWER({Tags})))'
        )
        assert len(fake_airtable.requests) == 1

    @pytest.mark.asyncio
    async def test_search_with_empty_field_names(self, context, fake_airtable) -> None:
        with pytest.raises(MissingFieldNamesError):
            await call_tool(
                context,
                "search-records",
                {"baseId": "appTEST", "tableIdOrName": "Products", "searchTerm": "red", "fieldNames": []},
            )
        assert fake_airtable.requests == []
