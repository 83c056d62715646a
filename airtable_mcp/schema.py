"""
Schema lookup for Airtable bases and tables
Uses the metadata endpoints; nothing is cached between calls
"""

import logging
from typing import Any, Dict, List

from .client import AirtableClient, path_segment
from .errors import TableNotFoundError

logger = logging.getLogger(__name__)


def _field_descriptor(field: Dict[str, Any]) -> Dict[str, Any]:
    descriptor = {
        "id": field["id"],
        "name": field["name"],
        "type": field.get("type"),
    }
    if field.get("description"):
        descriptor["description"] = field["description"]
    return descriptor


def _table_descriptor(table: Dict[str, Any]) -> Dict[str, Any]:
    descriptor = {
        "id": table["id"],
        "name": table["name"],
        "fields": [_field_descriptor(f) for f in table.get("fields", [])],
    }
    if table.get("description"):
        descriptor["description"] = table["description"]
    return descriptor


class SchemaLookup:
    """Reads bases and table schemas from the Airtable metadata API"""

    def __init__(self, client: AirtableClient):
        self.client = client

    async def list_bases(self) -> List[Dict[str, Any]]:
        bases = await self.client.get_paginated("/meta/bases", "bases")
        return [
            {"id": base["id"], "name": base["name"], "permissionLevel": base.get("permissionLevel")}
            for base in bases
        ]

    async def list_tables(self, base_id: str) -> List[Dict[str, Any]]:
        result = await self.client.get(f"/meta/bases/{path_segment(base_id)}/tables")
        return [_table_descriptor(table) for table in result.get("tables", [])]

    async def get_table_schema(self, base_id: str, table_id_or_name: str) -> Dict[str, Any]:
        """Return the schema of the table whose id or name matches.

        Raises TableNotFoundError when no table in the base matches, and
        RemoteOperationError when the metadata request itself fails.
        """
        for table in await self.list_tables(base_id):
            if table["id"] == table_id_or_name or table["name"] == table_id_or_name:
                return table

        logger.warning(f"Table '{table_id_or_name}' not found in base {base_id}")
        raise TableNotFoundError(table_id_or_name, base_id)
