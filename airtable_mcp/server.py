#!/usr/bin/env python3
"""
MCP Server for Airtable Integration
Exposes Airtable operations as MCP tools for LLM integration

Supports both stdio (MCP transport) and HTTP modes; the HTTP app offers REST
routes as well as a generic tool-call endpoint over the same handlers
"""

import asyncio
import json
import logging
import sys
import uuid
from typing import Any, Dict, List, Optional, Tuple

from fastapi import Body, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request as StarletteRequest

from .config import ServerConfig, configure_logging
from .context import ServiceContext, build_context
from .errors import AirtableMCPError, ConfigurationError, ValidationError
from .handlers import call_tool, tool_definitions
from .models import (
    CompletionRequest,
    DeletedRecordResponse,
    ErrorResponse,
    RecordResponse,
    ToolCallRequest,
    ToolCallResponse,
    ToolListResponse,
)

logger = logging.getLogger(__name__)


def _trace_prefix(trace_id: Optional[str]) -> str:
    return f"[TRACE:{trace_id}] " if trace_id else ""


async def execute_tool(
    context: ServiceContext, name: str, arguments: Optional[Dict[str, Any]], trace_id: Optional[str] = None
) -> Tuple[Any, Optional[str]]:
    """Run a tool and return ``(payload, error_message)``.

    Failures never propagate: the payload is then the ``{error, details}`` dict.
    """
    prefix = _trace_prefix(trace_id)
    logger.info(f"{prefix}Executing tool: {name}")
    try:
        return await call_tool(context, name, arguments), None
    except AirtableMCPError as e:
        logger.error(f"{prefix}Error executing tool {name}: {e.message}")
        return e.to_dict(), e.message
    except Exception as e:
        logger.exception(f"{prefix}Unexpected error executing tool {name}")
        return {"error": str(e), "details": {"type": type(e).__name__}}, str(e)


def to_text_content(payload: Any) -> List[TextContent]:
    return [TextContent(type="text", text=json.dumps(payload, indent=2, default=str))]


def create_mcp_server(context: ServiceContext) -> Server:
    """Build the MCP server (stdio mode) bound to ``context``"""
    server = Server(context.config.server_name)

    @server.list_tools()
    async def list_tools() -> List[Tool]:
        """List all available MCP tools"""
        return tool_definitions()

    # Arguments are validated by the registry, which also accepts snake_case names
    @server.call_tool(validate_input=False)
    async def handle_call_tool(name: str, arguments: Dict[str, Any]) -> List[TextContent]:
        """Handle tool execution - delegates to the registry"""
        payload, _ = await execute_tool(context, name, arguments)
        return to_text_content(payload)

    return server


class DistributedTracingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: StarletteRequest, call_next):
        # Extract trace ID from incoming request or generate new one
        trace_id = request.headers.get("X-Trace-ID") or str(uuid.uuid4())
        request.state.trace_id = trace_id

        logger.info(f"[TRACE:{trace_id}] MCP Server request: {request.method} {request.url.path}")
        response = await call_next(request)
        response.headers["X-Trace-ID"] = trace_id
        logger.info(f"[TRACE:{trace_id}] MCP Server response: {response.status_code}")

        return response


def _parse_sort(raw: Optional[str]) -> Optional[Any]:
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except ValueError as e:
        raise ValidationError(f"Invalid arguments: sort: not valid JSON ({e})") from e


def create_app(context: ServiceContext) -> FastAPI:
    """Build the FastAPI app (HTTP mode) bound to ``context``"""
    config = context.config
    http_app = FastAPI(
        title="Airtable MCP Server HTTP API",
        description="HTTP API for Airtable tools: REST routes plus MCP-style tool calls",
        version=config.server_version,
    )

    http_app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-API-Key", "X-Trace-ID"],
    )
    http_app.add_middleware(DistributedTracingMiddleware)

    @http_app.exception_handler(AirtableMCPError)
    async def airtable_error_handler(request: Request, exc: AirtableMCPError):
        trace_id = getattr(request.state, "trace_id", None)
        logger.error(f"{_trace_prefix(trace_id)}{request.method} {request.url.path} failed: {exc.message}")
        body = ErrorResponse(**exc.to_dict()).model_dump(exclude_none=True)
        return JSONResponse(status_code=exc.status_code, content=body)

    @http_app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        error = ValidationError("Invalid request body", {"errors": json.loads(json.dumps(exc.errors(), default=str))})
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @http_app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        trace_id = getattr(request.state, "trace_id", None)
        logger.exception(f"{_trace_prefix(trace_id)}{request.method} {request.url.path} failed unexpectedly")
        body = ErrorResponse(error=str(exc), details={"type": type(exc).__name__}).model_dump(exclude_none=True)
        return JSONResponse(status_code=500, content=body)

    async def run(name: str, arguments: Dict[str, Any]) -> Any:
        return await call_tool(context, name, arguments)

    @http_app.get("/health")
    async def http_health_check():
        """Health check for HTTP mode"""
        return {"status": "healthy", "service": config.server_name, "version": config.server_version}

    @http_app.get("/tools", response_model=ToolListResponse)
    async def http_list_tools():
        """HTTP endpoint to list available tools"""
        return ToolListResponse(tools=tool_definitions())

    @http_app.post("/tools/call", response_model=ToolCallResponse)
    async def http_call_tool(request: ToolCallRequest, http_request: Request):
        """HTTP endpoint to call a tool by name"""
        trace_id = getattr(http_request.state, "trace_id", None)
        payload, error = await execute_tool(context, request.name, request.arguments, trace_id)
        return ToolCallResponse(result=to_text_content(payload), success=error is None, error=error)

    @http_app.get("/bases")
    async def http_list_bases():
        return await run("list-bases", {})

    @http_app.get("/bases/{base_id}/tables")
    async def http_list_tables(base_id: str):
        return await run("list-tables", {"baseId": base_id})

    @http_app.get("/bases/{base_id}/tables/{table_id_or_name}")
    async def http_describe_table(base_id: str, table_id_or_name: str):
        return await run("describe-table", {"baseId": base_id, "tableIdOrName": table_id_or_name})

    @http_app.get(
        "/bases/{base_id}/tables/{table_id_or_name}/records",
        response_model=List[RecordResponse],
        response_model_exclude_none=True,
    )
    async def http_list_records(
        base_id: str,
        table_id_or_name: str,
        max_records: Optional[int] = Query(None, alias="maxRecords"),
        view: Optional[str] = None,
        fields: Optional[List[str]] = Query(None),
        filter_by_formula: Optional[str] = Query(None, alias="filterByFormula"),
        sort: Optional[str] = Query(None, description='JSON list, e.g. [{"field": "Name", "direction": "asc"}]'),
    ):
        arguments = {
            "baseId": base_id,
            "tableIdOrName": table_id_or_name,
            "maxRecords": max_records,
            "view": view,
            "fields": fields,
            "filterByFormula": filter_by_formula,
            "sort": _parse_sort(sort),
        }
        return await run("list-records", arguments)

    @http_app.post(
        "/bases/{base_id}/tables/{table_id_or_name}/records",
        status_code=201,
        response_model=RecordResponse,
        response_model_exclude_none=True,
    )
    async def http_create_record(base_id: str, table_id_or_name: str, payload: Dict[str, Any] = Body(...)):
        arguments = {"baseId": base_id, "tableIdOrName": table_id_or_name, "fields": payload.get("fields")}
        return await run("create-record", arguments)

    @http_app.get(
        "/bases/{base_id}/tables/{table_id_or_name}/records/{record_id}",
        response_model=RecordResponse,
        response_model_exclude_none=True,
    )
    async def http_get_record(base_id: str, table_id_or_name: str, record_id: str):
        arguments = {"baseId": base_id, "tableIdOrName": table_id_or_name, "recordId": record_id}
        return await run("get-record", arguments)

    @http_app.patch(
        "/bases/{base_id}/tables/{table_id_or_name}/records/{record_id}",
        response_model=RecordResponse,
        response_model_exclude_none=True,
    )
    async def http_update_record(
        base_id: str, table_id_or_name: str, record_id: str, payload: Dict[str, Any] = Body(...)
    ):
        arguments = {
            "baseId": base_id,
            "tableIdOrName": table_id_or_name,
            "recordId": record_id,
            "fields": payload.get("fields"),
        }
        return await run("update-record", arguments)

    @http_app.delete(
        "/bases/{base_id}/tables/{table_id_or_name}/records/{record_id}", response_model=DeletedRecordResponse
    )
    async def http_delete_record(base_id: str, table_id_or_name: str, record_id: str):
        arguments = {"baseId": base_id, "tableIdOrName": table_id_or_name, "recordId": record_id}
        return await run("delete-record", arguments)

    @http_app.post(
        "/bases/{base_id}/tables/{table_id_or_name}/search",
        response_model=List[RecordResponse],
        response_model_exclude_none=True,
    )
    async def http_search_records(base_id: str, table_id_or_name: str, payload: Dict[str, Any] = Body(...)):
        arguments = {**payload, "baseId": base_id, "tableIdOrName": table_id_or_name}
        return await run("search-records", arguments)

    @http_app.post("/completions")
    async def http_completions(request: CompletionRequest):
        """Forward a chat-completion request to the configured LLM API"""
        return await context.completions.create(request.model_dump(exclude_unset=True))

    return http_app


async def main(mode: Optional[str] = None):
    """Main function to start the MCP server"""
    try:
        config = ServerConfig.from_env()
    except ConfigurationError as e:
        configure_logging()
        logger.error(f"CRITICAL: {e.message}")
        raise SystemExit(1) from e

    configure_logging(config.log_level)
    mode = mode or config.server_mode
    context = build_context(config)

    logger.info(f"Starting MCP Server: {config.server_name} v{config.server_version}")
    logger.info(f"Mode: {mode}")
    logger.info(f"Airtable API: {config.airtable_api_url}")

    try:
        if mode == "http":
            import uvicorn
            logger.info(f"Starting MCP Server in HTTP mode on port {config.server_port}")
            uvicorn_config = uvicorn.Config(
                create_app(context), host="0.0.0.0", port=config.server_port, log_level=config.log_level.lower()
            )
            await uvicorn.Server(uvicorn_config).serve()
        else:
            logger.info("Starting MCP Server in stdio mode")
            server = create_mcp_server(context)
            async with stdio_server() as (read_stream, write_stream):
                await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        await context.close()


def run():
    """Console entry point; ``--http`` forces HTTP mode"""
    mode = "http" if "--http" in sys.argv[1:] else None
    asyncio.run(main(mode))


if __name__ == "__main__":
    run()
