"""
Default configuration for the rail-relay library.

Single source of truth for every setting the library consumes. The
``mutation_settings`` section mirrors ``rail_relay.settings.RelayMutationSettings``.
Projects override values through ``settings.RAIL_RELAY``.
"""

from __future__ import annotations

from typing import Any

from .constants import RESOLVER_POSITIONAL_ARGUMENTS

LIBRARY_VERSION = "0.1.0"
LIBRARY_NAME = "rail-relay"


# --------------------------------------------------------------------------- #
# Library-wide defaults
# --------------------------------------------------------------------------- #
LIBRARY_DEFAULTS: dict[str, Any] = {
    "mutation_settings": {
        "input_object_class": "rail_relay.inputs.RelayInputObjectType",
        "input_description": "Autogenerated input type of {name}",
        "payload_description": "Autogenerated return type of {name}.",
        "input_argument_description": "Parameters for {name}",
        "warn_on_client_mutation_id_overwrite": True,
        "enforce_argument_permissions": True,
        "extra_providers": {},
    },
}


# --------------------------------------------------------------------------- #
# Environment specific overrides
# --------------------------------------------------------------------------- #
ENVIRONMENT_DEFAULTS: dict[str, dict[str, Any]] = {
    "development": {
        "mutation_settings": {
            "warn_on_client_mutation_id_overwrite": True,
        },
    },
    "testing": {
        "mutation_settings": {
            "warn_on_client_mutation_id_overwrite": True,
        },
    },
    "production": {
        "mutation_settings": {
            "warn_on_client_mutation_id_overwrite": False,
        },
    },
}

_TEMPLATE_KEYS = (
    "input_description",
    "payload_description",
    "input_argument_description",
)
_BOOLEAN_KEYS = (
    "warn_on_client_mutation_id_overwrite",
    "enforce_argument_permissions",
)


# --------------------------------------------------------------------------- #
# Helper functions
# --------------------------------------------------------------------------- #
def get_default_settings() -> dict[str, Any]:
    """Return a copy of the library defaults."""
    return merge_settings(LIBRARY_DEFAULTS)


def get_environment_defaults(environment: str) -> dict[str, Any]:
    """Return environment-specific overrides."""
    return merge_settings(ENVIRONMENT_DEFAULTS.get(environment, {}))


def merge_settings(*settings_dicts: dict[str, Any]) -> dict[str, Any]:
    """
    Merge multiple settings dictionaries with deep merging for nested dicts.
    Later dictionaries override earlier ones.
    """
    result: dict[str, Any] = {}
    for settings_dict in settings_dicts:
        for key, value in settings_dict.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = merge_settings(result[key], value)
            elif isinstance(value, dict):
                result[key] = merge_settings(value)
            else:
                result[key] = value
    return result


def validate_settings(settings: dict[str, Any]) -> list[str]:
    """
    Validate a settings dictionary and return a list of validation errors.
    """
    errors: list[str] = []

    mutation_settings = settings.get("mutation_settings")
    if mutation_settings is None:
        errors.append("Required setting 'mutation_settings' is missing")
        return errors
    if not isinstance(mutation_settings, dict):
        errors.append("mutation_settings must be a dictionary")
        return errors

    known_keys = set(LIBRARY_DEFAULTS["mutation_settings"])
    for key in sorted(set(mutation_settings) - known_keys):
        errors.append(f"Unknown setting 'mutation_settings.{key}'")

    base_path = mutation_settings.get("input_object_class")
    if not isinstance(base_path, str) or "." not in base_path:
        errors.append(
            "mutation_settings.input_object_class must be a dotted import path"
        )

    for key in _TEMPLATE_KEYS:
        template = mutation_settings.get(key)
        if not isinstance(template, str) or "{name}" not in template:
            errors.append(f"mutation_settings.{key} must contain '{{name}}'")

    for key in _BOOLEAN_KEYS:
        if not isinstance(mutation_settings.get(key), bool):
            errors.append(f"mutation_settings.{key} must be a boolean")

    providers = mutation_settings.get("extra_providers")
    if not isinstance(providers, dict):
        errors.append("mutation_settings.extra_providers must be a dictionary")
    else:
        for name, path in providers.items():
            if name in RESOLVER_POSITIONAL_ARGUMENTS:
                errors.append(
                    f"mutation_settings.extra_providers.{name} shadows a positional resolver argument"
                )
            if not isinstance(path, str) or "." not in path:
                errors.append(
                    f"mutation_settings.extra_providers.{name} must be a dotted import path"
                )

    return errors
