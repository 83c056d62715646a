"""
Error types for the Airtable MCP Server
Every error carries a message, optional details and the HTTP status it maps to
"""

from typing import Any, Dict, Optional


class AirtableMCPError(Exception):
    """Base class for errors surfaced to tool and HTTP callers"""

    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class ValidationError(AirtableMCPError):
    """A required request parameter is missing or malformed"""

    status_code = 422


class NoSearchableFieldsError(AirtableMCPError):
    """Field resolution produced no field to search in"""

    status_code = 400

    def __init__(self, message: str = "No searchable fields found", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class MissingFieldNamesError(AirtableMCPError):
    """Formula search was requested without any field names"""

    status_code = 400

    def __init__(
        self,
        message: str = "The 'fieldNames' array must contain at least one field name to search in",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)


class TableNotFoundError(AirtableMCPError):
    status_code = 404

    def __init__(self, table_id_or_name: str, base_id: Optional[str] = None):
        details = {"table": table_id_or_name}
        if base_id:
            details["base_id"] = base_id
        super().__init__(f"Table '{table_id_or_name}' not found", details)
        self.table_id_or_name = table_id_or_name


class RemoteOperationError(AirtableMCPError):
    """Any failure reported by (or while reaching) a remote API"""

    status_code = 502

    def __init__(
        self,
        message: str,
        remote_status: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = dict(details or {})
        if remote_status is not None:
            details.setdefault("status", remote_status)
        super().__init__(message, details)
        self.remote_status = remote_status
        # Client errors from the remote side are passed through as-is
        if remote_status is not None and 400 <= remote_status < 500:
            self.status_code = remote_status


class ConfigurationError(AirtableMCPError):
    """A required setting or credential is absent"""

    status_code = 503


class UnknownToolError(AirtableMCPError):
    status_code = 404

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}", {"tool": name})
