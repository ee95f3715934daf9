"""
Django app configuration for rail-relay.

Validates the ``RAIL_RELAY`` settings once Django has loaded.
"""

import logging

from django.apps import AppConfig as BaseAppConfig
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

from .defaults import LIBRARY_NAME

logger = logging.getLogger(__name__)


class AppConfig(BaseAppConfig):
    """Django app configuration for rail-relay."""

    name = "rail_relay"
    verbose_name = "Rail Relay Mutations"
    label = "rail_relay"

    def ready(self):
        """Validate library configuration after Django has loaded."""
        errors = self._validate_configuration()
        if not errors:
            logger.debug(f"{LIBRARY_NAME} settings validated")
            return
        for error in errors:
            logger.error(f"Invalid {LIBRARY_NAME} setting: {error}")
        if self._is_debug_mode():
            raise ImproperlyConfigured("; ".join(errors))

    def _validate_configuration(self) -> list[str]:
        """Validate merged settings and the import paths they reference."""
        from .defaults import validate_settings
        from .settings import get_merged_settings

        merged = get_merged_settings()
        errors = validate_settings(merged)
        if errors:
            return errors

        mutation_settings = merged["mutation_settings"]
        paths = {"input_object_class": mutation_settings["input_object_class"]}
        for name, path in mutation_settings["extra_providers"].items():
            paths[f"extra_providers.{name}"] = path
        for key, path in paths.items():
            try:
                import_string(path)
            except ImportError as e:
                errors.append(f"mutation_settings.{key} cannot be imported: {e}")
        return errors

    def _is_debug_mode(self) -> bool:
        return bool(getattr(settings, "DEBUG", False))
