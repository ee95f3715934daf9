"""
Argument-level authorization.

Rules are declared per argument (``permissions`` codenames and/or an
``authorize`` callable). Mutations expose a single synthetic ``input``
argument, so checks are redirected to the arguments nested in the
generated input type.
"""

import logging
from typing import Any, Mapping, Optional

from graphene.types.structures import Structure
from graphql import GraphQLError, ObjectValueNode, Undefined, VariableNode

from .arguments import external_field_name
from .constants import INPUT_ARGUMENT

logger = logging.getLogger(__name__)


def unwrap_type(type_: Any) -> Any:
    """Strip NonNull/List wrappers from a graphene type."""
    while isinstance(type_, Structure):
        type_ = type_.of_type
    return type_


def nested_input_arguments(args: Mapping[str, Any]) -> dict[str, Any]:
    """
    Return the argument metadata nested below the ``input`` argument.

    Args:
        args: Top-level argument metadata keyed by name, containing ``input``

    Returns:
        The fields of the input object type, keyed by Python name
    """
    input_type = unwrap_type(args[INPUT_ARGUMENT].type)
    return dict(input_type._meta.fields)


def _get_user(info: Any) -> Any:
    context = getattr(info, "context", None)
    if isinstance(context, dict):
        return context.get("user")
    return getattr(context, "user", None)


def check_argument_access(info: Any, argument: Any, value: Any) -> None:
    """
    Enforce one argument's rules for ``value``.

    Raises:
        GraphQLError: If the user may not set the argument
    """
    if argument.permissions:
        user = _get_user(info)
        if not user or not getattr(user, "is_authenticated", False):
            logger.warning("Authentication required to set argument '%s'", argument.name)
            raise GraphQLError("Authentication required")
        has_perm = getattr(user, "has_perm", None)
        for permission in argument.permissions:
            if not callable(has_perm) or not has_perm(permission):
                logger.warning(
                    "Permission denied for argument '%s': missing %s",
                    argument.name,
                    permission,
                )
                raise GraphQLError(f"Permission required: {permission}")

    if argument.authorize is not None and not argument.authorize(value, info):
        logger.warning("Authorization rule rejected argument '%s'", argument.name)
        raise GraphQLError(f"Not authorized to set argument '{argument.name}'")


def sent_input_names(info: Any, arguments: Mapping[str, Any]) -> Optional[set[str]]:
    """
    Return the keys of the input fields written in the operation.

    Only known when ``input`` is an object literal. Fields bound to a
    variable the client did not provide count as not sent. Returns ``None``
    when ``input`` comes from a variable as a whole.
    """
    field_nodes = getattr(info, "field_nodes", None)
    if not field_nodes:
        return None
    input_node = next(
        (
            node
            for node in field_nodes[0].arguments or ()
            if node.name.value == INPUT_ARGUMENT
        ),
        None,
    )
    if input_node is None or not isinstance(input_node.value, ObjectValueNode):
        return None

    variables = getattr(info, "variable_values", None) or {}
    keys = {
        external_field_name(key, input_field): key
        for key, input_field in arguments.items()
    }
    sent = set()
    for field_node in input_node.value.fields:
        value = field_node.value
        if isinstance(value, VariableNode) and value.name.value not in variables:
            continue
        key = keys.get(field_node.name.value)
        if key is not None:
            sent.add(key)
    return sent


def _was_sent(name: str, argument: Any, value: Any, sent: Optional[set[str]]) -> bool:
    if sent is not None:
        return name in sent
    # Variables arrive with defaults already applied.
    return argument.default_value is Undefined or value != argument.default_value


def authorize_argument_values(
    info: Any, arguments: Mapping[str, Any], values: Mapping[str, Any]
) -> bool:
    """
    Check every value the client sent against its argument's rules.

    Values graphql-core filled in from an argument's default are not
    checked. Fields without an attached ``MutationArgument`` carry no rules.
    """
    sent = sent_input_names(info, arguments)
    for name, value in values.items():
        argument = getattr(arguments.get(name), "argument", None)
        if argument is None or not argument.requires_authorization:
            continue
        if not _was_sent(name, argument, value, sent):
            continue
        check_argument_access(info, argument, value)
    return True
