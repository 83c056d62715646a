"""
Service context shared by all handlers
"""

from dataclasses import dataclass
from typing import Optional

import httpx

from .client import AirtableClient
from .completions import CompletionClient
from .config import ServerConfig
from .records import RecordAccessor
from .schema import SchemaLookup
from .search import RecordSearch


@dataclass
class ServiceContext:
    config: ServerConfig
    airtable: AirtableClient
    schema: SchemaLookup
    records: RecordAccessor
    search: RecordSearch
    completions: CompletionClient

    async def close(self) -> None:
        await self.airtable.close()
        await self.completions.close()


def build_context(
    config: ServerConfig,
    airtable_transport: Optional[httpx.AsyncBaseTransport] = None,
    completion_transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ServiceContext:
    """Wire the clients and services for one process (transports are overridable for tests)"""
    airtable = AirtableClient(config, transport=airtable_transport)
    schema = SchemaLookup(airtable)
    records = RecordAccessor(airtable)
    return ServiceContext(
        config=config,
        airtable=airtable,
        schema=schema,
        records=records,
        search=RecordSearch(schema, records),
        completions=CompletionClient(config, transport=completion_transport),
    )
