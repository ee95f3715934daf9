"""
Custom exceptions for Relay Classic mutations.

Configuration problems are raised while the schema is assembled and are
never swallowed. Request-time failures use ``graphql.GraphQLError`` and
resolver errors propagate untouched.
"""

from typing import Optional


class RelayMutationError(Exception):
    """Base exception for the mutation convention layer."""

    def __init__(self, message: str, mutation_name: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.mutation_name = mutation_name

    def __str__(self) -> str:
        if self.mutation_name:
            return f"{self.mutation_name}: {self.message}"
        return self.message


class MutationConfigurationError(RelayMutationError):
    """Raised when a mutation definition cannot be assembled."""

    def __init__(
        self,
        message: str,
        mutation_name: Optional[str] = None,
        argument_name: Optional[str] = None,
    ):
        self.argument_name = argument_name
        super().__init__(message, mutation_name)
