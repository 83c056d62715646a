"""
Record search for Airtable tables

Two variants are offered:

* client-side: resolve searchable fields from the table schema, fetch a page of
  records and keep those where any field contains the term;
* server-side: build an Airtable formula from explicit field names and let
  Airtable filter the records.

Both match case-insensitively on substrings.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set

from .errors import MissingFieldNamesError, NoSearchableFieldsError, RemoteOperationError
from .records import RecordAccessor
from .schema import SchemaLookup

logger = logging.getLogger(__name__)

# Field types searched when no explicit field ids are given.
# "phone" is kept alongside Airtable's own "phoneNumber".
TEXT_FIELD_TYPES = frozenset({
    "singleLineText",
    "multilineText",
    "richText",
    "email",
    "url",
    "phone",
    "phoneNumber",
    "multipleRecordLinks",
})


def resolve_search_fields(table_schema: Dict[str, Any], field_ids: Optional[Sequence[str]] = None) -> Set[str]:
    """Resolve the names of the fields a search should look in.

    With a non-empty ``field_ids``, the names of the schema fields carrying
    those ids are returned; ids missing from the schema are dropped silently.
    Otherwise every text-like field is used.

    Raises NoSearchableFieldsError when nothing is left to search.
    """
    fields = table_schema.get("fields", [])
    if field_ids:
        wanted = set(field_ids)
        names = {f["name"] for f in fields if f.get("id") in wanted}
    else:
        names = {f["name"] for f in fields if f.get("type") in TEXT_FIELD_TYPES}

    if not names:
        raise NoSearchableFieldsError(details={"table": table_schema.get("name"), "field_ids": list(field_ids or [])})
    return names


def field_matches(value: Any, term: str) -> bool:
    """True if a string value, or any string element of a list, contains ``term``"""
    needle = term.lower()
    if isinstance(value, str):
        return needle in value.lower()
    if isinstance(value, list):
        return any(isinstance(item, str) and needle in item.lower() for item in value)
    return False


def record_matches(record: Dict[str, Any], field_names: Iterable[str], term: str) -> bool:
    fields = record.get("fields") or {}
    return any(field_matches(fields.get(name), term) for name in field_names)


def escape_formula_string(value: str) -> str:
    return value.replace('"', '""')


def build_search_formula(field_names: Sequence[str], term: str) -> str:
    """Build an OR of case-insensitive FIND() calls, one per field.

    Double quotes in the term are doubled before it is embedded.
    """
    if not field_names:
        raise MissingFieldNamesError()

    literal = escape_formula_string(term)
    parts = [f'FIND(LOWER("{literal}"), LOWER({{{name}}}))' for name in field_names]
    return f"OR({', '.join(parts)})"


class RecordSearch:
    """Runs either search variant against one table"""

    def __init__(self, schema: SchemaLookup, records: RecordAccessor):
        self.schema = schema
        self.records = records

    async def search_records(
        self,
        base_id: str,
        table_id_or_name: str,
        term: str,
        field_ids: Optional[Sequence[str]] = None,
        max_records: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Client-side search: schema, then records, then filter; strictly in that order"""
        table = await self.schema.get_table_schema(base_id, table_id_or_name)
        field_names = resolve_search_fields(table, field_ids)
        logger.info(f"Searching {len(field_names)} field(s) of {table['name']} for '{term}'")

        records = await self.records.list_records(base_id, table_id_or_name, max_records=max_records)
        return [r for r in records if record_matches(r, field_names, term)]

    async def search_records_by_formula(
        self,
        base_id: str,
        table_id_or_name: str,
        term: str,
        field_names: Sequence[str],
        max_records: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Server-side search: Airtable evaluates the generated formula"""
        formula = build_search_formula(field_names, term)
        try:
            return await self.records.list_records(
                base_id, table_id_or_name, max_records=max_records, filter_formula=formula
            )
        except RemoteOperationError as e:
            e.details["constructedFormula"] = formula
            raise
