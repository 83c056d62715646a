"""
Airtable REST client
Async HTTP client for the Airtable Web API with bearer-token auth
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union
from urllib.parse import quote

import httpx

from .config import ServerConfig
from .errors import RemoteOperationError

logger = logging.getLogger(__name__)

QueryParams = Union[Dict[str, Any], Sequence[Tuple[str, Any]], None]


def _error_message(response: httpx.Response) -> str:
    """Pull the human-readable message out of an Airtable error body"""
    try:
        body = response.json()
    except ValueError:
        return response.text or f"API responded with status {response.status_code}"

    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict):
        message = error.get("message") or error.get("type")
        if message:
            return str(message)
    elif isinstance(error, str):
        return error
    return f"API responded with status {response.status_code}"


def path_segment(value: str) -> str:
    """Quote a base/table/record identifier for use as one URL path segment"""
    return quote(value, safe="")


class AirtableClient:
    """HTTP client for communicating with the Airtable API"""

    def __init__(self, config: ServerConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = config.airtable_api_url.rstrip("/")
        self.headers = {
            "Authorization": f"Bearer {config.airtable_access_token}",
            "Content-Type": "application/json",
        }
        self.client = httpx.AsyncClient(timeout=config.airtable_timeout, transport=transport)

    async def request(
        self,
        method: str,
        endpoint: str,
        params: QueryParams = None,
        data: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Send a request and return the decoded JSON body.

        Connection failures and non-success statuses are raised as
        RemoteOperationError carrying the remote message.
        """
        url = f"{self.base_url}{endpoint}"
        try:
            response = await self.client.request(method, url, headers=self.headers, params=params, json=data)
        except httpx.HTTPError as e:
            logger.error(f"Airtable request failed: {method} {endpoint}: {e}")
            raise RemoteOperationError(f"Could not reach Airtable API: {e}") from e

        if response.is_error:
            message = _error_message(response)
            logger.error(f"Airtable API error {response.status_code} on {method} {endpoint}: {message}")
            raise RemoteOperationError(message, remote_status=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise RemoteOperationError(
                "Airtable API returned a non-JSON response", remote_status=response.status_code
            ) from e

    async def get(self, endpoint: str, params: QueryParams = None) -> Dict[str, Any]:
        """Make GET request to Airtable"""
        return await self.request("GET", endpoint, params=params)

    async def post(self, endpoint: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """Make POST request to Airtable"""
        return await self.request("POST", endpoint, data=data)

    async def patch(self, endpoint: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """Make PATCH request to Airtable"""
        return await self.request("PATCH", endpoint, data=data)

    async def delete(self, endpoint: str) -> Dict[str, Any]:
        """Make DELETE request to Airtable"""
        return await self.request("DELETE", endpoint)

    async def get_paginated(
        self,
        endpoint: str,
        key: str,
        params: Optional[List[Tuple[str, Any]]] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Follow Airtable's ``offset`` cursor and collect ``body[key]`` items.

        Stops once ``limit`` items are collected, no cursor is returned, or the
        remote hands back a cursor it already gave.
        """
        items: List[Dict[str, Any]] = []
        seen_offsets = set()
        offset = None
        while True:
            page_params = list(params or [])
            if offset:
                page_params.append(("offset", offset))
            body = await self.get(endpoint, params=page_params)
            items.extend(body.get(key, []))
            offset = body.get("offset")
            if not offset or (limit is not None and len(items) >= limit):
                break
            if offset in seen_offsets:
                logger.warning(f"Airtable returned offset {offset} twice for {endpoint}; stopping pagination")
                break
            seen_offsets.add(offset)
        return items[:limit] if limit is not None else items

    async def close(self) -> None:
        await self.client.aclose()
