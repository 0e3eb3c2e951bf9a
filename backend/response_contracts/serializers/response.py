"""
Response body and header builders.

Provides the JSON shapes for each contract type, the standard error
envelope, and the Content-Disposition header for downloads.
"""

import unicodedata
from typing import Any, Dict, Mapping, Optional
from urllib.parse import quote

from flask import g, has_app_context


def _current_request_id() -> Optional[str]:
    if has_app_context():
        return getattr(g, 'request_id', None)
    return None


def small_body(data: Any, metadata: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Build the body for a small contract.

    Object payloads keep their keys at the top level with metadata nested
    under "metadata" (which wins if the payload has its own "metadata" key).
    Array payloads are wrapped under "data".

    Returns:
        {**data, "metadata": {...}}  or  {"data": [...], "metadata": {...}}
    """
    if isinstance(data, Mapping):
        body = dict(data)
    else:
        body = {"data": list(data)}
    body["metadata"] = dict(metadata)
    return body


def paginated_body(items: Any, metadata: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Build the body for a paginated contract.

    Returns:
        {
            "items": [...],
            "pagination": {
                "page": 1,
                "pageSize": 10,
                "total": 25,
                "totalPages": 3,
                "hasNext": true,
                "hasPrevious": false,
                "timestamp": "..."
            }
        }
    """
    return {
        "items": list(items),
        "pagination": dict(metadata),
    }


def error_envelope(
    code: str,
    message: str,
    field: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
    hint: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build a standardized error response envelope.

    Args:
        code: Error code (e.g., "InvalidSmallData", "INVALID_PARAMS")
        message: Human-readable error message
        field: Optional field that caused the error
        details: Optional additional details
        hint: Optional hint for fixing the error

    Returns:
        Error response dict:
        {
            "error": {
                "code": "...",
                "message": "...",
                "requestId": "...",
                ...
            }
        }
    """
    error = {
        "code": str(code),
        "message": message,
        "requestId": _current_request_id(),
    }

    # Optional fields
    if field:
        error['field'] = field
    if details:
        error['details'] = details
    if hint:
        error['hint'] = hint

    return {"error": error}


def header_value(value: Any) -> str:
    """Render a value for a response header. Header values cannot carry line breaks."""
    return str(value).replace('\r', '').replace('\n', '')


def content_disposition(filename: str) -> str:
    """
    Build an attachment Content-Disposition header value.

    Non-ASCII names get an RFC 5987 filename* parameter with an ASCII
    fallback, matching werkzeug's send_file.

    Examples:
        "report.csv" -> attachment; filename="report.csv"
        "résumé.pdf" -> attachment; filename="resume.pdf"; filename*=UTF-8''r%C3%A9sum%C3%A9.pdf
    """
    filename = header_value(filename)

    try:
        filename.encode('ascii')
    except UnicodeEncodeError:
        simple = unicodedata.normalize('NFKD', filename)
        simple = simple.encode('ascii', 'ignore').decode('ascii')
        quoted = quote(filename, safe="!#$&+-.^_`|~")
        return f'attachment; filename="{_escape_quoted(simple)}"; filename*=UTF-8\'\'{quoted}'

    return f'attachment; filename="{_escape_quoted(filename)}"'


def _escape_quoted(value: str) -> str:
    return value.replace('\\', '\\\\').replace('"', '\\"')
