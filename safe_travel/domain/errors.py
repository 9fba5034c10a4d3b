"""Typed domain errors for the SafeTravel routing core.

Precondition and data-loading problems surface to the caller as typed
errors. Anomalies in ancillary data (disruptions, missing edge
properties) are logged by the cost model and never raise.

All errors inherit from SafeTravelError and can optionally wrap a root
cause exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class SafeTravelError(Exception):
    """Base error for the routing domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class InvalidRouteRequestError(SafeTravelError):
    """A route request violates a precondition.

    Raised before any search state is allocated.

    Attributes:
        parameter: Name of the offending argument
        value: The rejected value, rendered as text
    """

    parameter: str = ""
    value: str = ""


@dataclass
class NodeNotFoundError(SafeTravelError):
    """No node with the given application id exists in the graph.

    Attributes:
        node_id: The id that was looked up
    """

    node_id: Optional[int] = None


@dataclass
class NoRouteFoundError(SafeTravelError):
    """The open set was exhausted without reaching the goal.

    Only raised by callers that ask for it explicitly; the solver itself
    returns an empty result.

    Attributes:
        start_id: Id of the start node
        end_id: Id of the end node
    """

    start_id: Optional[int] = None
    end_id: Optional[int] = None


@dataclass
class SearchCancelledError(SafeTravelError):
    """The cancellation check asked the search to stop.

    Attributes:
        expanded: Number of nodes expanded before cancellation
    """

    expanded: int = 0


@dataclass
class SearchInvariantError(SafeTravelError):
    """Internal search state is inconsistent. Indicates a bug."""


@dataclass
class GraphError(SafeTravelError):
    """Graph loading or data integrity error.

    Attributes:
        file_path: Path to the graph data file if relevant
    """

    file_path: Optional[str] = None


@dataclass
class ConfigurationError(SafeTravelError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None


@dataclass
class RenderingError(SafeTravelError):
    """Map rendering failed.

    Attributes:
        output_path: Path where rendering was attempted
        renderer_type: Type of renderer that failed
    """

    output_path: Optional[str] = None
    renderer_type: str = ""
