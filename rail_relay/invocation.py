"""
Request-time adapter between the single ``input`` argument and a
mutation's resolver.

The adapter unwraps ``input`` into keyword arguments, transfers requested
extras, removes the client mutation id, calls the resolver and writes the
id back into the settled result.
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from dataclasses import dataclass
from functools import partial
from typing import Any, Iterable, Optional

from graphene import ObjectType

from .constants import CLIENT_MUTATION_ID, INPUT_ARGUMENT
from .deferred import after_settled
from .extras import collect_extras, get_extra_providers
from .settings import RelayMutationSettings

logger = logging.getLogger(__name__)


@dataclass
class InvocationInput:
    """
    Keyword arguments prepared for one resolver call.

    Attributes:
        arguments: Flat keyword form of ``input`` plus transferred extras
        client_mutation_id: Correlation id removed from the arguments
        extras: Names of the extras transferred into ``arguments``
    """

    arguments: dict[str, Any]
    client_mutation_id: Any = None
    extras: tuple[str, ...] = ()


def to_kwargs(input_value: Any) -> dict[str, Any]:
    """Convert the ``input`` value to a flat keyword dictionary."""
    if input_value is None:
        return {}
    return dict(input_value)


def is_keyed_record(value: Any) -> bool:
    return isinstance(value, (MutableMapping, ObjectType))


def reinsert_client_mutation_id(
    client_mutation_id: Any,
    value: Any,
    mutation_name: Optional[str] = None,
    warn_on_overwrite: bool = True,
) -> Any:
    """
    Write ``client_mutation_id`` into a settled keyed record.

    The id is always written, ``None`` included. Values that are not keyed
    records, such as errors, are returned unchanged.
    """
    if not is_keyed_record(value):
        return value

    if isinstance(value, MutableMapping):
        existing = value.get(CLIENT_MUTATION_ID)
        value[CLIENT_MUTATION_ID] = client_mutation_id
    else:
        existing = getattr(value, CLIENT_MUTATION_ID, None)
        setattr(value, CLIENT_MUTATION_ID, client_mutation_id)

    if warn_on_overwrite and existing is not None and existing != client_mutation_id:
        logger.warning(
            "%s resolver set client_mutation_id=%r; replaced with the client's %r",
            mutation_name or "Mutation",
            existing,
            client_mutation_id,
        )
    return value


class InvocationAdapter:
    """
    Resolver installed on a Relay Classic mutation field.

    Args:
        mutation: The mutation class
        arguments: The field's top-level argument metadata (``{"input": ...}``)
        field_extras: Extras requested by this particular field
    """

    def __init__(
        self,
        mutation: Any,
        arguments: Optional[dict[str, Any]] = None,
        field_extras: Iterable[str] = (),
    ):
        self.mutation = mutation
        self.arguments = arguments or {}
        self.field_extras = tuple(field_extras)

    def __repr__(self) -> str:
        return f"<InvocationAdapter {self.definition.graphql_name} extras={list(self.extras)}>"

    @property
    def definition(self):
        return self.mutation._meta.definition

    @property
    def extras(self) -> tuple[str, ...]:
        names = list(self.definition.all_extras())
        for name in self.field_extras:
            if name not in names:
                names.append(name)
        return tuple(names)

    def prepare(self, root: Any, info: Any, raw_arguments: dict[str, Any], mutation_settings: RelayMutationSettings) -> InvocationInput:
        """Build the resolver's keyword arguments for one call."""
        extras = self.extras
        raw = dict(raw_arguments)
        for name, value in collect_extras(
            extras, root, info, get_extra_providers(mutation_settings)
        ).items():
            raw.setdefault(name, value)

        input_kwargs = to_kwargs(raw.get(INPUT_ARGUMENT))

        if mutation_settings.enforce_argument_permissions and self.arguments:
            self.mutation.authorize_arguments(info, self.arguments, dict(input_kwargs))

        transferred = []
        for name in extras:
            if name in raw:
                input_kwargs[name] = raw[name]
                transferred.append(name)

        client_mutation_id = input_kwargs.pop(CLIENT_MUTATION_ID, None)
        return InvocationInput(
            arguments=input_kwargs,
            client_mutation_id=client_mutation_id,
            extras=tuple(transferred),
        )

    def __call__(self, root: Any, info: Any, **raw_arguments: Any) -> Any:
        mutation_settings = RelayMutationSettings.load()
        invocation = self.prepare(root, info, raw_arguments, mutation_settings)
        resolver = self.mutation._meta.resolver

        logger.debug(
            "Resolving %s with arguments %s",
            self.definition.graphql_name,
            sorted(invocation.arguments),
        )
        if invocation.arguments:
            result = resolver(root, info, **invocation.arguments)
        else:
            result = resolver(root, info)

        return after_settled(
            result,
            partial(
                reinsert_client_mutation_id,
                invocation.client_mutation_id,
                mutation_name=self.definition.graphql_name,
                warn_on_overwrite=mutation_settings.warn_on_client_mutation_id_overwrite,
            ),
        )
