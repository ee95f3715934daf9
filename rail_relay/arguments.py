"""
Mutation arguments and their mirroring onto generated input types.

Arguments are recorded in an ownership-tagged table on each
``MutationDefinition``. The generated input type is kept in lock-step with
the definition's effective arguments: an argument redeclared by a subclass
replaces the inherited one on the subclass' input type only.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Optional

import graphene
from graphene.types.unmountedtype import UnmountedType
from graphene.utils.str_converters import to_camel_case
from graphql import Undefined

from .constants import CLIENT_MUTATION_ID, CLIENT_MUTATION_ID_DESCRIPTION
from .exceptions import MutationConfigurationError

if TYPE_CHECKING:
    from .definition import MutationDefinition

logger = logging.getLogger(__name__)

ARGUMENT_OPTIONS = frozenset(
    {
        "required",
        "default_value",
        "name",
        "deprecation_reason",
        "permissions",
        "authorize",
    }
)


@dataclass(frozen=True)
class MutationArgument:
    """
    A single argument declared by a mutation.

    Attributes:
        name: Python name, also the key the resolver receives
        type: Graphene type (class, structure or lazy reference)
        owner: Mutation class that declared the argument
        description: Optional description exposed on the input type
        required: Wrap the type in NonNull when mirrored
        default_value: Default used by graphql-core when the value is omitted
        graphql_name: Explicit external name, camel-cased key otherwise
        deprecation_reason: Deprecation notice for optional arguments
        permissions: Permission codenames checked before the resolver runs
        authorize: Callable ``(value, info) -> bool`` checked before the resolver runs
    """

    name: str
    type: Any
    owner: Any = None
    description: Optional[str] = None
    required: bool = False
    default_value: Any = Undefined
    graphql_name: Optional[str] = None
    deprecation_reason: Optional[str] = None
    permissions: tuple[str, ...] = field(default_factory=tuple)
    authorize: Optional[Callable[[Any, Any], bool]] = None

    @property
    def external_name(self) -> str:
        return self.graphql_name or to_camel_case(self.name)

    @property
    def requires_authorization(self) -> bool:
        return bool(self.permissions) or self.authorize is not None

    @classmethod
    def declare(
        cls,
        name: str,
        type_: Any,
        /,
        description: Optional[str] = None,
        owner: Any = None,
        **options: Any,
    ) -> "MutationArgument":
        """
        Build an argument from a graphene-style declaration.

        ``type_`` may be a type class, an unmounted instance such as
        ``graphene.String(required=True)`` or a mounted ``graphene.Argument``
        / ``graphene.InputField``. Options embedded in the declaration are
        used unless overridden by explicit keyword options.
        """
        owner_name = getattr(owner, "__name__", None)
        raw_type, embedded = _split_declaration(type_)
        unknown = set(options) - ARGUMENT_OPTIONS
        if unknown:
            raise MutationConfigurationError(
                f"Unknown argument options: {', '.join(sorted(unknown))}",
                mutation_name=owner_name,
                argument_name=name,
            )
        merged = {k: v for k, v in embedded.items() if k in ARGUMENT_OPTIONS}
        merged.update(options)
        if description is None:
            description = embedded.get("description")

        argument = cls(
            name=name,
            type=raw_type,
            owner=owner,
            description=description,
            required=bool(merged.get("required", False)),
            default_value=merged.get("default_value", Undefined),
            graphql_name=merged.get("name"),
            deprecation_reason=merged.get("deprecation_reason"),
            permissions=_normalize_permissions(merged.get("permissions")),
            authorize=merged.get("authorize"),
        )
        argument.validate()
        return argument

    def validate(self) -> None:
        owner_name = getattr(self.owner, "__name__", None)
        if self.name == CLIENT_MUTATION_ID or self.external_name == "clientMutationId":
            raise MutationConfigurationError(
                f"'{self.name}' is reserved for the client mutation id",
                mutation_name=owner_name,
                argument_name=self.name,
            )
        if self.required and self.deprecation_reason:
            raise MutationConfigurationError(
                f"Argument '{self.name}' is required and cannot be deprecated",
                mutation_name=owner_name,
                argument_name=self.name,
            )
        if self.authorize is not None and not callable(self.authorize):
            raise MutationConfigurationError(
                f"Argument '{self.name}' authorize option must be callable",
                mutation_name=owner_name,
                argument_name=self.name,
            )


def _split_declaration(type_: Any) -> tuple[Any, dict[str, Any]]:
    if isinstance(type_, (graphene.Argument, graphene.InputField)):
        embedded = {
            "description": type_.description,
            "deprecation_reason": type_.deprecation_reason,
            "name": type_.name,
        }
        if type_.default_value is not Undefined:
            embedded["default_value"] = type_.default_value
        return type_._type, embedded
    if isinstance(type_, UnmountedType):
        return type_.get_type(), dict(type_.kwargs)
    return type_, {}


def _normalize_permissions(permissions: Any) -> tuple[str, ...]:
    if not permissions:
        return ()
    if isinstance(permissions, str):
        return (permissions,)
    return tuple(permissions)


class MutationInputField(graphene.InputField):
    """Input field mirroring a ``MutationArgument`` onto a generated input type."""

    def __init__(self, argument: MutationArgument, **extra_args: Any):
        self.argument = argument
        super().__init__(
            argument.type,
            name=argument.graphql_name,
            default_value=argument.default_value,
            deprecation_reason=argument.deprecation_reason,
            description=argument.description,
            required=argument.required,
            **extra_args,
        )


def build_client_mutation_id_field() -> graphene.InputField:
    return graphene.InputField(
        graphene.String,
        description=CLIENT_MUTATION_ID_DESCRIPTION,
        required=False,
    )


def external_field_name(key: str, input_field: Any) -> str:
    return getattr(input_field, "name", None) or to_camel_case(key)


def _check_external_names(fields: dict[str, Any], input_type: Any) -> None:
    seen: dict[str, str] = {}
    for key, input_field in fields.items():
        external = external_field_name(key, input_field)
        if external in seen:
            raise MutationConfigurationError(
                f"Fields '{seen[external]}' and '{key}' both map to '{external}' "
                f"on {input_type._meta.name}",
                argument_name=key,
            )
        seen[external] = key


def mirror_arguments(input_type: Any, resolved: dict[str, MutationArgument]) -> None:
    """
    Bring ``input_type``'s fields in line with ``resolved`` arguments.

    Fields declared on a custom input object base come first and are kept
    unless an argument supersedes them. Mirrored fields follow in resolution
    order; those whose argument lost its name slot to an override are
    replaced. The client mutation id stays last.
    """
    fields = input_type._meta.fields
    candidate = {
        key: input_field
        for key, input_field in fields.items()
        if key != CLIENT_MUTATION_ID
        and key not in resolved
        and not isinstance(input_field, MutationInputField)
    }

    for key, argument in resolved.items():
        current = fields.get(key)
        if isinstance(current, MutationInputField) and current.argument is argument:
            candidate[key] = current
        else:
            candidate[key] = MutationInputField(argument)

    candidate[CLIENT_MUTATION_ID] = (
        fields.get(CLIENT_MUTATION_ID) or build_client_mutation_id_field()
    )

    _check_external_names(candidate, input_type)

    fields.clear()
    fields.update(candidate)
    logger.debug(
        "Mirrored %d argument(s) onto %s", len(resolved), input_type._meta.name
    )


def declare_argument(definition: "MutationDefinition", argument: MutationArgument) -> MutationArgument:
    """
    Declare ``argument`` on ``definition`` and mirror it onto its input type.

    The input type is built first so inherited arguments are already
    present. Built input types of subclasses are re-mirrored as well.
    """
    with definition.lock:
        definition.input_type()
        previous = definition.own_arguments.get(argument.name)
        definition.own_arguments[argument.name] = argument
        try:
            definition.sync_input_types()
        except MutationConfigurationError as exc:
            if previous is None:
                definition.own_arguments.pop(argument.name, None)
            else:
                definition.own_arguments[argument.name] = previous
            definition.sync_input_types()
            exc.mutation_name = exc.mutation_name or definition.graphql_name
            raise
    return argument
