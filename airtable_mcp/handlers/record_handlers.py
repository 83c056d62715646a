"""
Record Handlers for MCP Server
Handles CRUD operations for Airtable records
"""

import logging
from typing import Any, Dict, List

from ..context import ServiceContext
from ..models import (
    CreateRecordRequest,
    ListRecordsRequest,
    RecordRequest,
    UpdateRecordRequest,
)

logger = logging.getLogger(__name__)


async def handle_list_records(context: ServiceContext, request: ListRecordsRequest) -> List[Dict[str, Any]]:
    """Handle list-records tool"""
    sort = [s.model_dump() for s in request.sort] if request.sort else None
    return await context.records.list_records(
        request.base_id,
        request.table_id_or_name,
        max_records=request.max_records,
        view=request.view,
        sort=sort,
        fields=request.fields,
        filter_formula=request.filter_by_formula,
    )


async def handle_get_record(context: ServiceContext, request: RecordRequest) -> Dict[str, Any]:
    """Handle get-record tool"""
    return await context.records.get_record(request.base_id, request.table_id_or_name, request.record_id)


async def handle_create_record(context: ServiceContext, request: CreateRecordRequest) -> Dict[str, Any]:
    """Handle create-record tool"""
    record = await context.records.create_record(request.base_id, request.table_id_or_name, request.fields)
    logger.info(f"Created record {record['id']} in {request.base_id}/{request.table_id_or_name}")
    return record


async def handle_update_record(context: ServiceContext, request: UpdateRecordRequest) -> Dict[str, Any]:
    """Handle update-record tool"""
    return await context.records.update_record(
        request.base_id, request.table_id_or_name, request.record_id, request.fields
    )


async def handle_delete_record(context: ServiceContext, request: RecordRequest) -> Dict[str, Any]:
    """Handle delete-record tool"""
    result = await context.records.delete_record(request.base_id, request.table_id_or_name, request.record_id)
    logger.info(f"Deleted record {request.record_id} from {request.base_id}/{request.table_id_or_name}")
    return result
