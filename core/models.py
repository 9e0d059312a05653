# =============================================================================
# core/models.py  -  Data Models (the "nouns" of the system)
# =============================================================================
#
# Two kinds of models live here:
#
#   1. REQUEST MODELS (pydantic)
#      RelativeSearchRequest / AbsoluteSearchRequest describe what a caller
#      may send to a search tool.  The constrained types below are shared
#      with tools/mcp_server.py, so the JSON schema the agent sees and the
#      validation the handler runs are the same rules.
#
#   2. RESULT MODELS (dataclasses)
#      SearchResult / CountResult are the projections handed back to the
#      caller.  Only the fields listed here ever leave the server.
#
# "No Phantom Fields":
#   Graylog returns much more per message (decoration stats, highlight
#   ranges, ...).  If a field is not in a result model, the agent never
#   sees it.
# =============================================================================

from dataclasses import dataclass, field
from typing import Annotated, Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr

# Graylog refuses page sizes above this on the universal search endpoints.
MAX_LIMIT = 1000

Number = Union[int, float]

# -----------------------------------------------------------------------------
# Constrained argument types
# -----------------------------------------------------------------------------
# Strict: "300" is not a range and "yes" is not a boolean.
Query = Annotated[
    StrictStr,
    Field(min_length=1, description="Graylog search query written in Lucene syntax."),
]
RangeSeconds = Annotated[
    StrictInt,
    Field(gt=0, description="Relative timeframe in seconds to search backwards from now."),
]
Timestamp = Annotated[StrictStr, Field(min_length=1)]
Limit = Annotated[
    StrictInt,
    Field(gt=0, le=MAX_LIMIT, description="Maximum number of messages to return (default 150)."),
]
Offset = Annotated[StrictInt, Field(ge=0, description="Pagination offset for the result set.")]
Sort = Annotated[StrictStr, Field(description="Sort expression, e.g., 'timestamp:desc'.")]
StreamFilter = Annotated[
    StrictStr,
    Field(description="Graylog stream filter expression, e.g., 'streams:<stream-id>'."),
]
FieldNames = Annotated[
    list[Annotated[StrictStr, Field(min_length=1)]],
    Field(
        min_length=1,
        description="Restrict response to these fields (will be joined as comma separated list).",
    ),
]
Decorate = Annotated[StrictBool, Field(description="Whether to apply Graylog message decorators.")]

FROM_DESCRIPTION = (
    "Inclusive start timestamp (ISO 8601 or Graylog date format, e.g., '2025-01-01 00:00:00')."
)
TO_DESCRIPTION = (
    "Inclusive end timestamp (ISO 8601 or Graylog date format, e.g., '2025-01-01 23:59:59')."
)


# -----------------------------------------------------------------------------
# Request models
# -----------------------------------------------------------------------------
class SearchRequest(BaseModel):
    """Arguments shared by every universal search tool."""

    model_config = ConfigDict(populate_by_name=True, strict=True)

    query: Query
    limit: Optional[Limit] = None
    offset: Optional[Offset] = None
    sort: Optional[Sort] = None
    filter: Optional[StreamFilter] = None
    fields: Optional[FieldNames] = None
    decorate: Optional[Decorate] = None


class RelativeSearchRequest(SearchRequest):
    """Search window expressed as "the last N seconds"."""

    range: RangeSeconds


class AbsoluteSearchRequest(SearchRequest):
    """Search window expressed as explicit start and end timestamps."""

    # "from" is a Python keyword; the wire name is kept through the alias.
    from_: Timestamp = Field(alias="from", description=FROM_DESCRIPTION)
    to: Timestamp = Field(description=TO_DESCRIPTION)


# -----------------------------------------------------------------------------
# Result models
# -----------------------------------------------------------------------------
@dataclass
class MessageEntry:
    """One matched message, projected for the caller."""

    index: str                         # Elasticsearch/OpenSearch index it came from
    message: dict[str, Any]            # Field name -> value, as Graylog stored it
    highlight: Optional[dict[str, Any]] = None
    # highlight is dropped from the serialized entry when None.


@dataclass
class CountResult:
    """What the count tools return: totals only, no messages."""

    query: str
    took_ms: Number
    total_results: Number


@dataclass
class SearchResult:
    """What the search tools return.

    total_results is Graylog's own count and can be larger than
    len(messages) when limit truncated the page.
    """

    query: str
    took_ms: Number
    total_results: Number
    messages: list[MessageEntry] = field(default_factory=list)
