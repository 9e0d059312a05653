# =============================================================================
# core/formatter.py  -  Response Shaping
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns Graylog's universal search JSON into the result models the tools
#   return:
#
#     format_search_result()  -> SearchResult  (query, took_ms, total_results, messages)
#     format_count_result()   -> CountResult   (query, took_ms, total_results)
#     result_to_dict()        -> plain dict ready for json.dumps
#
# SHAPE CHECKS:
#   Only the fields we read are checked.  A missing or wrongly-typed field
#   raises DecodingError, which the handler turns into an error result.
#   The input dict is never modified.
# =============================================================================

from dataclasses import asdict
from typing import Any, Mapping, Union

from core.errors import DecodingError
from core.models import CountResult, MessageEntry, SearchResult


def _require(data: Mapping[str, Any], key: str, kind: Any, label: str) -> Any:
    if key not in data:
        raise DecodingError(f"Graylog response is missing '{key}'.")
    value = data[key]
    # bool is an int subclass; a boolean count is still malformed.
    if isinstance(value, bool) or not isinstance(value, kind):
        raise DecodingError(f"Graylog response field '{key}' is not {label}: {value!r}")
    return value


def _summary(data: Any) -> tuple[str, Union[int, float], Union[int, float]]:
    if not isinstance(data, Mapping):
        raise DecodingError(f"Graylog response is not a JSON object: {type(data).__name__}")
    return (
        _require(data, "query", str, "a string"),
        _require(data, "took_ms", (int, float), "a number"),
        _require(data, "total_results", (int, float), "a number"),
    )


def _message_entry(position: int, entry: Any) -> MessageEntry:
    if not isinstance(entry, Mapping):
        raise DecodingError(f"Graylog message #{position} is not a JSON object.")
    if "index" not in entry or "message" not in entry:
        raise DecodingError(f"Graylog message #{position} is missing 'index' or 'message'.")
    return MessageEntry(
        index=entry["index"],
        message=entry["message"],
        highlight=entry.get("highlight"),
    )


def format_search_result(data: Any) -> SearchResult:
    """Project a full search response down to what the caller may see."""
    query, took_ms, total_results = _summary(data)
    messages = data.get("messages")
    if not isinstance(messages, list):
        raise DecodingError("Graylog response field 'messages' is not a list.")
    return SearchResult(
        query=query,
        took_ms=took_ms,
        total_results=total_results,
        messages=[_message_entry(i, entry) for i, entry in enumerate(messages)],
    )


def format_count_result(data: Any) -> CountResult:
    """Keep only the totals; messages are never looked at."""
    query, took_ms, total_results = _summary(data)
    return CountResult(query=query, took_ms=took_ms, total_results=total_results)


def result_to_dict(result: Union[SearchResult, CountResult]) -> dict[str, Any]:
    """Serialize a result model, dropping highlight from entries that have none."""
    result_dict = asdict(result)
    for entry in result_dict.get("messages", []):
        if entry["highlight"] is None:
            entry.pop("highlight")
    return result_dict
