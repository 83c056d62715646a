"""
Record accessor for a single Airtable table
Translates normalized parameters into Airtable API calls and normalizes responses
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .client import AirtableClient, path_segment

logger = logging.getLogger(__name__)

DEFAULT_MAX_RECORDS = 100
# Airtable never returns more than 100 records per page
PAGE_SIZE = 100


def normalize_record(record: Dict[str, Any]) -> Dict[str, Any]:
    """Reduce an Airtable record to ``{id, fields, createdTime?}``"""
    normalized = {"id": record["id"], "fields": record.get("fields", {})}
    if record.get("createdTime"):
        normalized["createdTime"] = record["createdTime"]
    return normalized


def build_list_params(
    max_records: int = DEFAULT_MAX_RECORDS,
    view: Optional[str] = None,
    sort: Optional[Sequence[Dict[str, str]]] = None,
    fields: Optional[Sequence[str]] = None,
    filter_formula: Optional[str] = None,
) -> List[Tuple[str, Any]]:
    """Encode list options as Airtable query parameters"""
    params: List[Tuple[str, Any]] = [
        ("maxRecords", max_records),
        ("pageSize", min(max_records, PAGE_SIZE)),
    ]
    if view:
        params.append(("view", view))
    if filter_formula:
        params.append(("filterByFormula", filter_formula))
    for name in fields or []:
        params.append(("fields[]", name))
    for i, spec in enumerate(sort or []):
        params.append((f"sort[{i}][field]", spec["field"]))
        params.append((f"sort[{i}][direction]", spec.get("direction") or "asc"))
    return params


class RecordAccessor:
    """CRUD and list operations against Airtable tables"""

    def __init__(self, client: AirtableClient):
        self.client = client

    @staticmethod
    def _table_path(base_id: str, table_id_or_name: str) -> str:
        return f"/{path_segment(base_id)}/{path_segment(table_id_or_name)}"

    async def list_records(
        self,
        base_id: str,
        table_id_or_name: str,
        max_records: Optional[int] = None,
        view: Optional[str] = None,
        sort: Optional[Sequence[Dict[str, str]]] = None,
        fields: Optional[Sequence[str]] = None,
        filter_formula: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """List records in remote order, fetching at most ``max_records`` (default 100)"""
        if max_records is None:
            max_records = DEFAULT_MAX_RECORDS
        params = build_list_params(max_records, view, sort, fields, filter_formula)
        records = await self.client.get_paginated(
            self._table_path(base_id, table_id_or_name), "records", params=params, limit=max_records
        )
        logger.debug(f"Fetched {len(records)} records from {base_id}/{table_id_or_name}")
        return [normalize_record(r) for r in records]

    async def get_record(self, base_id: str, table_id_or_name: str, record_id: str) -> Dict[str, Any]:
        path = f"{self._table_path(base_id, table_id_or_name)}/{path_segment(record_id)}"
        return normalize_record(await self.client.get(path))

    async def create_record(self, base_id: str, table_id_or_name: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        result = await self.client.post(self._table_path(base_id, table_id_or_name), {"fields": fields})
        return normalize_record(result)

    async def update_record(
        self, base_id: str, table_id_or_name: str, record_id: str, fields: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Patch only the given fields; other fields keep their values"""
        path = f"{self._table_path(base_id, table_id_or_name)}/{path_segment(record_id)}"
        return normalize_record(await self.client.patch(path, {"fields": fields}))

    async def delete_record(self, base_id: str, table_id_or_name: str, record_id: str) -> Dict[str, Any]:
        path = f"{self._table_path(base_id, table_id_or_name)}/{path_segment(record_id)}"
        result = await self.client.delete(path)
        return {"id": result.get("id", record_id), "deleted": True}
