"""
Common utilities shared across routers.
"""

from .pagination import paged_request_dependency, sortable_field_names
from .responses import (
    ERROR_STATUS,
    envelope,
    failure_response,
    paged_envelope,
    problem_response,
)

__all__ = [
    # Pagination
    "paged_request_dependency",
    "sortable_field_names",
    # Responses
    "ERROR_STATUS",
    "envelope",
    "failure_response",
    "paged_envelope",
    "problem_response",
]
