"""
Search Handlers for MCP Server
"""

import logging
from typing import Any, Dict, List

from ..context import ServiceContext
from ..models import SearchRecordsRequest

logger = logging.getLogger(__name__)


async def handle_search_records(context: ServiceContext, request: SearchRecordsRequest) -> List[Dict[str, Any]]:
    """Handle search-records tool.

    Explicit ``fieldNames`` (even an empty list) select the formula search run
    by Airtable; otherwise fields are resolved from the schema and matched here.
    """
    if request.field_names is not None:
        return await context.search.search_records_by_formula(
            request.base_id,
            request.table_id_or_name,
            request.search_term,
            request.field_names,
            max_records=request.max_records,
        )

    return await context.search.search_records(
        request.base_id,
        request.table_id_or_name,
        request.search_term,
        field_ids=request.field_ids,
        max_records=request.max_records,
    )
