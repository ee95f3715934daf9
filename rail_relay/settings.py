"""
RelayMutationSettings implementation.

Settings are merged from the library defaults, the environment defaults and
the project's ``settings.RAIL_RELAY`` dictionary, in that order.
"""

from dataclasses import dataclass, field
from typing import Any, Dict

from django.conf import settings as django_settings

from .constants import SETTINGS_NAME
from .defaults import get_default_settings, get_environment_defaults, merge_settings


def _get_environment() -> str:
    """Resolve the active environment name from Django settings."""
    env = getattr(django_settings, "ENVIRONMENT", None)
    if env:
        return env
    return "development" if getattr(django_settings, "DEBUG", False) else "production"


def _get_global_settings() -> dict[str, Any]:
    """Get the project's RAIL_RELAY dictionary from Django settings."""
    return getattr(django_settings, SETTINGS_NAME, None) or {}


def get_merged_settings() -> dict[str, Any]:
    """
    Merge defaults + environment overrides + project settings.

    Without configured Django settings only the library defaults apply.
    """
    if not django_settings.configured:
        return get_default_settings()
    return merge_settings(
        get_default_settings(),
        get_environment_defaults(_get_environment()),
        _get_global_settings(),
    )


@dataclass
class RelayMutationSettings:
    """Settings for controlling Relay Classic mutation generation."""

    input_object_class: str = "rail_relay.inputs.RelayInputObjectType"
    input_description: str = "Autogenerated input type of {name}"
    payload_description: str = "Autogenerated return type of {name}."
    input_argument_description: str = "Parameters for {name}"
    warn_on_client_mutation_id_overwrite: bool = True
    enforce_argument_permissions: bool = True
    extra_providers: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def load(cls) -> "RelayMutationSettings":
        merged = get_merged_settings().get("mutation_settings", {})
        valid_fields = set(cls.__dataclass_fields__.keys())
        return cls(**{k: v for k, v in merged.items() if k in valid_fields})
