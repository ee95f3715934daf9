"""
rail-relay: Relay Classic mutations for graphene.

Public API:
- RelayClassicMutation: base class for mutations taking a single ``input``
- RelayInputObjectType: base class for generated input types
- MutationArgument, MutationDefinition: argument and configuration records
- MutationConfigurationError: raised while the schema is assembled
"""

from .arguments import MutationArgument, MutationInputField, declare_argument
from .defaults import LIBRARY_VERSION
from .definition import MutationDefinition
from .deferred import after_settled
from .exceptions import MutationConfigurationError, RelayMutationError
from .extras import MISSING
from .fields import RelayMutationField
from .inputs import RelayInputObjectType, build_input_type
from .invocation import InvocationAdapter, InvocationInput
from .mutation import RelayClassicMutation
from .settings import RelayMutationSettings

__version__ = LIBRARY_VERSION

__all__ = [
    "RelayClassicMutation",
    "RelayInputObjectType",
    "RelayMutationField",
    "MutationArgument",
    "MutationInputField",
    "MutationDefinition",
    "InvocationAdapter",
    "InvocationInput",
    "RelayMutationSettings",
    "RelayMutationError",
    "MutationConfigurationError",
    "MISSING",
    "after_settled",
    "build_input_type",
    "declare_argument",
]
