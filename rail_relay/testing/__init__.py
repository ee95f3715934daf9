"""
Public test utilities for rail-relay.
"""

from .harness import (
    RelayGraphQLTestClient,
    build_context,
    build_request,
    build_schema,
    override_relay_settings,
)

__all__ = [
    "RelayGraphQLTestClient",
    "build_context",
    "build_request",
    "build_schema",
    "override_relay_settings",
]
