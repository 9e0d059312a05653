# =============================================================================
# core/payload.py  -  Outgoing Payload Normalization
# =============================================================================
#
# Graylog's universal search endpoints take flat query-string parameters.
# Before a request goes out:
#   - keys whose value is None are dropped (Graylog treats "null" literally)
#   - a list of field names becomes one comma-separated string under the
#     same "fields" key; an empty list drops the key entirely
#
# Neither function mutates its input.
# =============================================================================

from typing import Any, Mapping

from pydantic import BaseModel


def clean_payload(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of payload without None values."""
    return {key: value for key, value in payload.items() if value is not None}


def with_fields(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Collapse payload["fields"] into a comma-joined string and drop None values.

    >>> with_fields({"fields": ["a", "b"], "x": 1})
    {'x': 1, 'fields': 'a,b'}
    >>> with_fields({"fields": [], "x": 1})
    {'x': 1}
    """
    rest = {key: value for key, value in payload.items() if key != "fields"}
    fields = payload.get("fields")
    if fields:
        rest["fields"] = ",".join(fields)
    return clean_payload(rest)


def build_payload(request: BaseModel, **overrides: Any) -> dict[str, Any]:
    """Turn a validated request model into query parameters.

    Only the keys the caller actually supplied are dumped (by wire alias,
    so AbsoluteSearchRequest.from_ becomes "from").  overrides are applied
    on top, then the result goes through with_fields().
    """
    supplied = request.model_dump(by_alias=True, exclude_unset=True)
    supplied.update(overrides)
    return with_fields(supplied)
