"""
Field signature of Relay Classic mutations.

From the schema's point of view a mutation takes exactly one required
argument, ``input``, typed as its generated input type.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Optional

import graphene

from .constants import INPUT_ARGUMENT
from .extras import validate_extras
from .invocation import InvocationAdapter
from .settings import RelayMutationSettings

if TYPE_CHECKING:
    from .definition import MutationDefinition


def build_input_argument(definition: "MutationDefinition") -> graphene.Argument:
    mutation_settings = RelayMutationSettings.load()
    return graphene.Argument(
        definition.input_type(),
        required=True,
        description=mutation_settings.input_argument_description.format(
            name=definition.graphql_name
        ),
    )


def build_field_arguments(definition: "MutationDefinition") -> dict[str, graphene.Argument]:
    """Replace the declared arguments with the single ``input`` argument."""
    return {INPUT_ARGUMENT: build_input_argument(definition)}


class RelayMutationField(graphene.Field):
    """
    Schema field exposing a Relay Classic mutation.

    Attributes:
        mutation: The mutation class resolved by this field
        extras: Extras requested by this field in addition to the mutation's
    """

    def __init__(
        self,
        mutation: Any,
        name: Optional[str] = None,
        description: Optional[str] = None,
        deprecation_reason: Optional[str] = None,
        required: bool = False,
        extras: Iterable[str] = (),
    ):
        definition = mutation._meta.definition
        self.mutation = mutation
        self.extras = tuple(validate_extras(extras, mutation_name=definition.graphql_name))
        arguments = build_field_arguments(definition)
        super().__init__(
            mutation._meta.output,
            args=arguments,
            resolver=InvocationAdapter(mutation, arguments, self.extras),
            name=name,
            description=description or definition.description,
            deprecation_reason=deprecation_reason,
            required=required,
        )
