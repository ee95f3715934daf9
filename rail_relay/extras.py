"""
Extras: context-derived values a resolver requests next to its arguments.

A provider takes ``(root, info)`` and returns the value, or ``MISSING`` when
the execution context cannot supply it. Missing extras are never
fabricated; they are simply absent from the resolver's keyword arguments.

The resolver already receives ``root`` and ``info`` positionally, so those
names cannot be used as extras.
"""

import logging
from typing import Any, Callable, Iterable, Optional

from django.utils.module_loading import import_string

from .constants import RESOLVER_POSITIONAL_ARGUMENTS
from .exceptions import MutationConfigurationError
from .settings import RelayMutationSettings

logger = logging.getLogger(__name__)

MISSING = object()

ExtraProvider = Callable[[Any, Any], Any]


def _context_user(root, info):
    context = getattr(info, "context", None)
    if context is None:
        return MISSING
    if isinstance(context, dict):
        return context.get("user", MISSING)
    return getattr(context, "user", MISSING)


def _ast_node(root, info):
    nodes = getattr(info, "field_nodes", None)
    return nodes[0] if nodes else MISSING


DEFAULT_EXTRA_PROVIDERS: dict[str, ExtraProvider] = {
    "parent": lambda root, info: root,
    "context": lambda root, info: getattr(info, "context", MISSING),
    "field_name": lambda root, info: getattr(info, "field_name", MISSING),
    "path": lambda root, info: getattr(info, "path", MISSING),
    "ast_node": _ast_node,
    "operation": lambda root, info: getattr(info, "operation", MISSING),
    "variable_values": lambda root, info: getattr(info, "variable_values", MISSING),
    "user": _context_user,
}


def get_extra_providers(
    mutation_settings: Optional[RelayMutationSettings] = None,
) -> dict[str, ExtraProvider]:
    """Return built-in providers merged with the ones configured in settings."""
    mutation_settings = mutation_settings or RelayMutationSettings.load()
    providers = dict(DEFAULT_EXTRA_PROVIDERS)
    for name, path in mutation_settings.extra_providers.items():
        try:
            providers[name] = import_string(path)
        except ImportError as exc:
            raise MutationConfigurationError(
                f"Cannot import extra provider '{name}' from '{path}': {exc}"
            ) from exc
    return providers


def validate_extras(
    names: Iterable[str], mutation_name: Optional[str] = None
) -> list[str]:
    """
    Check that every extra name has a provider.

    Returns:
        The names, de-duplicated and in declaration order

    Raises:
        MutationConfigurationError: If a name has no provider or is ``root`` / ``info``
    """
    if isinstance(names, str):
        names = [names]
    providers = get_extra_providers()
    validated: list[str] = []
    for name in names:
        if name in RESOLVER_POSITIONAL_ARGUMENTS:
            raise MutationConfigurationError(
                f"Extra '{name}' is already passed to the resolver positionally",
                mutation_name=mutation_name,
            )
        if name not in providers:
            raise MutationConfigurationError(
                f"Unknown extra '{name}'. Available extras: {', '.join(sorted(providers))}",
                mutation_name=mutation_name,
            )
        if name not in validated:
            validated.append(name)
    return validated


def collect_extras(
    names: Iterable[str],
    root: Any,
    info: Any,
    providers: Optional[dict[str, ExtraProvider]] = None,
) -> dict[str, Any]:
    """Evaluate the providers of ``names``, skipping values reported missing."""
    providers = providers if providers is not None else get_extra_providers()
    collected: dict[str, Any] = {}
    for name in names:
        provider = providers.get(name)
        if provider is None:
            continue
        value = provider(root, info)
        if value is MISSING:
            logger.debug("Extra '%s' is not available for this invocation", name)
            continue
        collected[name] = value
    return collected
