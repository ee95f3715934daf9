"""
Relay Classic mutation base class.

Mutations extending ``RelayClassicMutation`` get these conventions:

- every declared argument is nested in a generated ``<Name>Input`` object
  and the schema field takes one required ``input`` argument;
- ``clientMutationId`` is accepted on the input, withheld from ``mutate``
  and echoed back on the payload;
- the payload type (``<Name>Payload``) always has a ``clientMutationId``
  field.

Example:
    class CreateWidget(RelayClassicMutation):
        class Arguments:
            name = graphene.String(required=True)

        widget = graphene.Field(WidgetType)

        @classmethod
        def mutate(cls, root, info, name):
            return cls(widget=Widget.objects.create(name=name))

    class Mutation(graphene.ObjectType):
        create_widget = CreateWidget.Field()
"""

import logging
from typing import Any, Iterable, Optional

import graphene
from graphene.types.objecttype import ObjectTypeOptions
from graphene.utils.get_unbound_function import get_unbound_function
from graphene.utils.trim_docstring import trim_docstring

from .arguments import MutationArgument, declare_argument
from .authorization import authorize_argument_values, nested_input_arguments
from .constants import CLIENT_MUTATION_ID, CLIENT_MUTATION_ID_DESCRIPTION, PAYLOAD_TYPE_SUFFIX
from .definition import MutationDefinition
from .exceptions import MutationConfigurationError
from .fields import RelayMutationField
from .inputs import build_input_type
from .settings import RelayMutationSettings

logger = logging.getLogger(__name__)


class RelayMutationOptions(ObjectTypeOptions):
    output = None  # type: type[graphene.ObjectType]
    resolver = None  # type: Any
    definition = None  # type: MutationDefinition


def _parent_definition(cls) -> Optional[MutationDefinition]:
    for base in cls.__mro__[1:]:
        meta = base.__dict__.get("_meta")
        if isinstance(meta, RelayMutationOptions):
            return meta.definition
    return None


class RelayClassicMutation(graphene.ObjectType):
    """
    Base class for mutations following the Relay Classic input convention.

    Meta options:
        name: Mutation name (defaults to the class name)
        description: Mutation description (defaults to the docstring)
        extras: Context-derived values passed to ``mutate`` by name
        input_object_class: Base class for the generated input type
        input_type: Explicit input type, disables generation
        output: Payload type to use instead of the mutation class
        resolver: Resolver to use instead of ``mutate``
    """

    client_mutation_id = graphene.String(description=CLIENT_MUTATION_ID_DESCRIPTION)

    class Meta:
        abstract = True

    @classmethod
    def __init_subclass_with_meta__(
        cls,
        interfaces=(),
        resolver=None,
        output=None,
        name=None,
        description=None,
        extras=(),
        input_object_class=None,
        input_type=None,
        _meta=None,
        **options,
    ):
        if not _meta:
            _meta = RelayMutationOptions(cls)

        graphql_name = name or cls.__name__
        mutation_description = description or trim_docstring(cls.__doc__)

        output = output or getattr(cls, "Output", None)
        if output is not None and CLIENT_MUTATION_ID not in getattr(output._meta, "fields", {}):
            raise MutationConfigurationError(
                f"Output type {output._meta.name} must declare a client_mutation_id field",
                mutation_name=graphql_name,
            )

        if not resolver:
            mutate = getattr(cls, "mutate", None)
            if mutate is None:
                raise MutationConfigurationError(
                    "All mutations must define a mutate method",
                    mutation_name=graphql_name,
                )
            resolver = get_unbound_function(mutate)

        _meta.output = output or cls
        _meta.resolver = resolver
        _meta.definition = MutationDefinition(
            cls,
            graphql_name,
            description=mutation_description,
            parent=_parent_definition(cls),
            extras=extras,
            input_object_class=input_object_class,
            input_type=input_type,
        )

        payload_description = RelayMutationSettings.load().payload_description
        super(RelayClassicMutation, cls).__init_subclass_with_meta__(
            interfaces=interfaces,
            name=f"{graphql_name}{PAYLOAD_TYPE_SUFFIX}",
            description=payload_description.format(name=graphql_name),
            _meta=_meta,
            **options,
        )

        declared = cls.__dict__.get("Arguments")
        if declared is not None:
            for arg_name, value in vars(declared).items():
                if arg_name.startswith("_"):
                    continue
                cls.argument(arg_name, value)

    # ------------------------------------------------------------------ #
    # Schema-assembly API
    # ------------------------------------------------------------------ #
    @classmethod
    def argument(
        cls, name: str, type_: Any, /, description: Optional[str] = None, **options: Any
    ) -> MutationArgument:
        """
        Declare an argument and mirror it onto the input type.

        Options: ``required``, ``default_value``, ``name``,
        ``deprecation_reason``, ``permissions``, ``authorize``.
        """
        argument = MutationArgument.declare(
            name, type_, description, owner=cls, **options
        )
        return declare_argument(cls._meta.definition, argument)

    @classmethod
    def input_object_class(cls, new_class: Optional[type] = None) -> type:
        """Read or configure the base class of the generated input type."""
        return cls._meta.definition.input_object_class(new_class)

    @classmethod
    def input_type(cls, new_input_type: Optional[type] = None) -> type:
        """Return the ``input`` type, generating it on first access."""
        return cls._meta.definition.input_type(new_input_type)

    @classmethod
    def generate_input_type(cls) -> type:
        """Generate the input type. Override to customize generation."""
        return build_input_type(cls._meta.definition)

    @classmethod
    def Field(
        cls,
        name: Optional[str] = None,
        description: Optional[str] = None,
        deprecation_reason: Optional[str] = None,
        required: bool = False,
        extras: Iterable[str] = (),
    ) -> RelayMutationField:
        return RelayMutationField(
            cls,
            name=name,
            description=description,
            deprecation_reason=deprecation_reason,
            required=required,
            extras=extras,
        )

    # ------------------------------------------------------------------ #
    # Request-time hooks
    # ------------------------------------------------------------------ #
    @classmethod
    def authorize_arguments(cls, info, args, values) -> bool:
        # Rules live on the arguments nested in the input type.
        return authorize_argument_values(info, nested_input_arguments(args), values)
