"""
Generated input object types for Relay Classic mutations.

Every mutation owns one ``<MutationName>Input`` type nesting its arguments
under the single ``input`` argument, plus an optional ``clientMutationId``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import graphene
from graphene.types.inputobjecttype import InputObjectTypeOptions

from .arguments import MutationInputField, build_client_mutation_id_field
from .constants import CLIENT_MUTATION_ID, INPUT_TYPE_SUFFIX
from .settings import RelayMutationSettings

if TYPE_CHECKING:
    from .definition import MutationDefinition

logger = logging.getLogger(__name__)


class RelayInputObjectTypeOptions(InputObjectTypeOptions):
    mutation = None  # type: Any


class RelayInputObjectType(graphene.InputObjectType):
    """
    Base class for generated mutation input types.

    Accepts a ``mutation`` Meta option stored as ``_meta.mutation``: the
    mutation class the type was generated for. Subclass it (with
    ``abstract = True``) to share fields or behaviour across every
    generated input type.
    """

    class Meta:
        abstract = True

    @classmethod
    def __init_subclass_with_meta__(cls, mutation=None, _meta=None, **options):
        if not _meta:
            _meta = RelayInputObjectTypeOptions(cls)
        _meta.mutation = mutation
        super(RelayInputObjectType, cls).__init_subclass_with_meta__(
            _meta=_meta, **options
        )


def input_type_name(definition: "MutationDefinition") -> str:
    return f"{definition.graphql_name}{INPUT_TYPE_SUFFIX}"


def build_input_type(definition: "MutationDefinition") -> type[RelayInputObjectType]:
    """
    Generate the input object type for ``definition``.

    Args:
        definition: The mutation definition owning the generated type

    Returns:
        A subclass of ``definition.input_object_class()`` carrying every
        argument the mutation currently has (own and inherited), followed
        by ``client_mutation_id``.
    """
    mutation_settings = RelayMutationSettings.load()
    base = definition.input_object_class()
    name = input_type_name(definition)

    attrs: dict[str, Any] = {
        key: MutationInputField(argument)
        for key, argument in definition.effective_arguments().items()
    }
    attrs[CLIENT_MUTATION_ID] = build_client_mutation_id_field()
    attrs["Meta"] = {
        "name": name,
        "description": mutation_settings.input_description.format(
            name=definition.graphql_name
        ),
        "mutation": definition.mutation,
    }

    input_type = type(name, (base,), attrs)
    logger.debug(
        "Generated input type %s from %s with fields %s",
        name,
        base.__name__,
        list(input_type._meta.fields),
    )
    return input_type
