"""Tests for base and table schema lookup."""

import httpx
import pytest

from airtable_mcp.client import AirtableClient
from airtable_mcp.errors import RemoteOperationError, TableNotFoundError
from airtable_mcp.schema import SchemaLookup


@pytest.fixture
def lookup(config, fake_airtable) -> SchemaLookup:
    return SchemaLookup(AirtableClient(config, transport=fake_airtable.transport))


class TestListBases:
    @pytest.mark.asyncio
    async def test_follows_offset(self, lookup, fake_airtable) -> None:
        def bases(request: httpx.Request) -> httpx.Response:
            if request.url.params.get("offset") == "page2":
                return httpx.Response(200, json={"bases": [{"id": "app2", "name": "Two", "permissionLevel": "read"}]})
            return httpx.Response(
                200,
                json={"bases": [{"id": "app1", "name": "One", "permissionLevel": "create"}], "offset": "page2"},
            )

        fake_airtable.add_handler("GET", "/v0/meta/bases", bases)

        assert await lookup.list_bases() == [
            {"id": "app1", "name": "One", "permissionLevel": "create"},
            {"id": "app2", "name": "Two", "permissionLevel": "read"},
        ]

    @pytest.mark.asyncio
    async def test_repeated_offset_stops(self, lookup, fake_airtable) -> None:
        fake_airtable.add(
            "GET", "/v0/meta/bases", {"bases": [{"id": "app1", "name": "One", "permissionLevel": "read"}], "offset": "itr1"}
        )

        bases = await lookup.list_bases()

        assert len(fake_airtable.requests) == 2
        assert [b["id"] for b in bases] == ["app1", "app1"]


class TestListTables:
    @pytest.mark.asyncio
    async def test_reduces_field_descriptors(self, lookup) -> None:
        tables = await lookup.list_tables("appTEST")

        assert [t["name"] for t in tables] == ["Products", "Counters"]
        products = tables[0]
        assert products["description"] == "Things we sell"
        assert "views" not in products
        assert products["fields"][1] == {
            "id": "fldNotes",
            "name": "Notes",
            "type": "multilineText",
            "description": "Free text",
        }
        assert products["fields"][0] == {"id": "fldName", "name": "Name", "type": "singleLineText"}

    @pytest.mark.asyncio
    async def test_metadata_failure_is_remote_error(self, lookup, fake_airtable) -> None:
        fake_airtable.add("GET", "/v0/meta/bases/appBROKEN/tables", {"error": {"type": "SERVER_ERROR"}}, status=500)

        with pytest.raises(RemoteOperationError, match="SERVER_ERROR"):
            await lookup.list_tables("appBROKEN")


class TestGetTableSchema:
    @pytest.mark.asyncio
    async def test_by_name(self, lookup) -> None:
        table = await lookup.get_table_schema("appTEST", "Products")
        assert table["id"] == "tblProducts"

    @pytest.mark.asyncio
    async def test_by_id(self, lookup) -> None:
        table = await lookup.get_table_schema("appTEST", "tblCounters")
        assert table["name"] == "Counters"

    @pytest.mark.asyncio
    async def test_missing_table(self, lookup) -> None:
        with pytest.raises(TableNotFoundError) as excinfo:
            await lookup.get_table_schema("appTEST", "Nope")
        assert excinfo.value.details == {"table": "Nope", "base_id": "appTEST"}

    @pytest.mark.asyncio
    async def test_unknown_base(self, lookup) -> None:
        with pytest.raises(RemoteOperationError):
            await lookup.get_table_schema("appMISSING", "Products")
