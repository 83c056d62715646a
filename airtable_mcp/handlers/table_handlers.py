"""
Table Handlers for MCP Server
Handles operations related to Airtable bases, tables and schema
"""

import logging
from typing import Any, Dict, List

from ..context import ServiceContext
from ..models import BaseRequest, ListBasesRequest, TableRequest

logger = logging.getLogger(__name__)


async def handle_list_bases(context: ServiceContext, request: ListBasesRequest) -> List[Dict[str, Any]]:
    """Handle list-bases tool"""
    return await context.schema.list_bases()


async def handle_list_tables(context: ServiceContext, request: BaseRequest) -> List[Dict[str, Any]]:
    """Handle list-tables tool"""
    tables = await context.schema.list_tables(request.base_id)
    logger.info(f"Base {request.base_id} has {len(tables)} tables")
    return tables


async def handle_describe_table(context: ServiceContext, request: TableRequest) -> Dict[str, Any]:
    """Handle describe-table tool - schema of one table by id or name"""
    return await context.schema.get_table_schema(request.base_id, request.table_id_or_name)
