"""
Per-mutation configuration record.

A ``MutationDefinition`` is created for every concrete Relay Classic
mutation and stored on its graphene options (``Mutation._meta.definition``).
It owns the ownership-tagged argument table, the extras the resolver
requests and the lazily built input type. Once the input type is built the
record's type configuration is frozen.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Iterator, Optional

import graphene
from django.utils.module_loading import import_string

from .arguments import MutationArgument, mirror_arguments
from .exceptions import MutationConfigurationError
from .extras import validate_extras
from .inputs import RelayInputObjectType
from .settings import RelayMutationSettings

logger = logging.getLogger(__name__)

# Guards input type builds and argument mirroring across all definitions.
_build_lock = threading.RLock()


class MutationDefinition:
    """
    Configuration of one mutation class.

    Attributes:
        mutation: The mutation class this definition belongs to
        graphql_name: Mutation name, used to name generated types
        description: Mutation description exposed on its field
        parent: Definition of the nearest concrete ancestor mutation
        own_arguments: Arguments declared by this mutation only
        extras: Extras declared by this mutation only
    """

    def __init__(
        self,
        mutation: Any,
        graphql_name: str,
        description: Optional[str] = None,
        parent: Optional["MutationDefinition"] = None,
        extras: tuple[str, ...] = (),
        input_object_class: Optional[type] = None,
        input_type: Optional[type] = None,
    ):
        self.mutation = mutation
        self.graphql_name = graphql_name
        self.description = description
        self.parent = parent
        self.own_arguments: dict[str, MutationArgument] = {}
        self.extras = tuple(validate_extras(extras, mutation_name=graphql_name))
        self._input_object_class = None
        self._explicit_input_type = None
        self._input_type = None
        if input_object_class is not None:
            self.input_object_class(input_object_class)
        if input_type is not None:
            self.input_type(input_type)

    def __repr__(self) -> str:
        return f"<MutationDefinition {self.graphql_name} arguments={list(self.effective_arguments())}>"

    @property
    def lock(self) -> threading.RLock:
        return _build_lock

    @property
    def is_built(self) -> bool:
        return self._input_type is not None

    # ------------------------------------------------------------------ #
    # Ancestry
    # ------------------------------------------------------------------ #
    def ancestry(self) -> list["MutationDefinition"]:
        """Return the definition chain from the root ancestor to ``self``."""
        chain = []
        current: Optional[MutationDefinition] = self
        while current is not None:
            chain.append(current)
            current = current.parent
        chain.reverse()
        return chain

    def descendants(self) -> Iterator["MutationDefinition"]:
        """Yield definitions of every concrete subclass, depth first."""
        stack = list(self.mutation.__subclasses__())
        seen = set()
        while stack:
            subclass = stack.pop()
            if subclass in seen:
                continue
            seen.add(subclass)
            stack.extend(subclass.__subclasses__())
            if "_meta" not in subclass.__dict__:
                continue
            definition = getattr(subclass._meta, "definition", None)
            if definition is not None:
                yield definition

    def effective_arguments(self) -> dict[str, MutationArgument]:
        """
        Resolve the argument table across the ancestry.

        Later (more derived) declarations overwrite earlier ones.
        """
        resolved: dict[str, MutationArgument] = {}
        for definition in self.ancestry():
            resolved.update(definition.own_arguments)
        return resolved

    def all_extras(self) -> tuple[str, ...]:
        names: list[str] = []
        for definition in self.ancestry():
            for name in definition.extras:
                if name not in names:
                    names.append(name)
        return tuple(names)

    # ------------------------------------------------------------------ #
    # Input type configuration
    # ------------------------------------------------------------------ #
    def input_object_class(self, new_class: Optional[type] = None) -> type:
        """
        Read or configure the base class for the generated input type.

        Falls back to the parent's base, then to the ``input_object_class``
        setting.
        """
        if new_class is not None:
            if self.is_built:
                raise MutationConfigurationError(
                    "input_object_class cannot change after the input type was built",
                    mutation_name=self.graphql_name,
                )
            if not (isinstance(new_class, type) and issubclass(new_class, RelayInputObjectType)):
                raise MutationConfigurationError(
                    f"input_object_class must subclass RelayInputObjectType, got {new_class!r}",
                    mutation_name=self.graphql_name,
                )
            self._input_object_class = new_class
        if self._input_object_class is not None:
            return self._input_object_class
        if self.parent is not None:
            return self.parent.input_object_class()
        return _default_input_object_class(self.graphql_name)

    def input_type(self, new_input_type: Optional[type] = None) -> type:
        """
        Read or configure the input type.

        An explicit type is returned verbatim; otherwise the mutation's
        ``generate_input_type`` hook runs once and its result is memoized.
        """
        if new_input_type is not None:
            self._configure_input_type(new_input_type)
        if self._input_type is not None:
            return self._input_type
        with _build_lock:
            if self._input_type is None:
                if self._explicit_input_type is not None:
                    self._input_type = self._explicit_input_type
                else:
                    self._input_type = self.mutation.generate_input_type()
                    logger.debug("Built input type for %s", self.graphql_name)
        return self._input_type

    def _configure_input_type(self, new_input_type: type) -> None:
        if not (isinstance(new_input_type, type) and issubclass(new_input_type, graphene.InputObjectType)):
            raise MutationConfigurationError(
                f"input_type must be an InputObjectType subclass, got {new_input_type!r}",
                mutation_name=self.graphql_name,
            )
        with _build_lock:
            if self._input_type is not None and self._input_type is not new_input_type:
                raise MutationConfigurationError(
                    "input_type cannot change after it was built",
                    mutation_name=self.graphql_name,
                )
            self._explicit_input_type = new_input_type

    def owns(self, input_type: Any) -> bool:
        """Return True when ``input_type`` was generated for this mutation."""
        return getattr(getattr(input_type, "_meta", None), "mutation", None) is self.mutation

    def sync_input_types(self) -> None:
        """Re-mirror arguments onto this and every built descendant input type."""
        with _build_lock:
            for definition in [self, *self.descendants()]:
                if not definition.is_built:
                    continue
                input_type = definition._input_type
                if not definition.owns(input_type):
                    logger.debug(
                        "Skipping argument mirroring for explicit input type %s of %s",
                        input_type._meta.name,
                        definition.graphql_name,
                    )
                    continue
                mirror_arguments(input_type, definition.effective_arguments())


def _default_input_object_class(mutation_name: str) -> type:
    path = RelayMutationSettings.load().input_object_class
    try:
        base = import_string(path)
    except ImportError as exc:
        raise MutationConfigurationError(
            f"Cannot import input_object_class '{path}': {exc}",
            mutation_name=mutation_name,
        ) from exc
    if not (isinstance(base, type) and issubclass(base, RelayInputObjectType)):
        raise MutationConfigurationError(
            f"Setting input_object_class '{path}' must subclass RelayInputObjectType",
            mutation_name=mutation_name,
        )
    return base
