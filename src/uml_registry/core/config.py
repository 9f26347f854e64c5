#!/usr/bin/env python3
"""
Configuration for UML registry loading.

Options map one-to-one to the switches of the model loader. Every option can
be given in snake_case or in the camelCase spelling used by existing model
configuration files (e.g. ``generateFlatDocuments``), read from a YAML file,
or overridden via ``UML_REGISTRY_*`` environment variables.
"""

import logging
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .env_utils import getenv_bool, getenv_optional_name

logger = logging.getLogger(__name__)

ENV_PREFIX = "UML_REGISTRY_"


class RegistryConfig(BaseModel):
    """Switches that shape the generated record types.

    Legacy compatibility options:
        inverse_parent_child_relationship: older models were drawn with the
            generalization arrow reversed; swap parent and child when reading.
        force_one_to_many_in_non_flat: in hierarchic mode, put a foreign key on
            the many side of a one-to-many association (as flat mode does)
            instead of nesting the many side inside the one side.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    generate_flat_documents: bool = True
    add_database_fields: bool = True
    uuids: bool = True
    use_extensions: bool = False
    generate_collection_names: bool = False
    created_field: Optional[str] = None
    modified_field: Optional[str] = None
    inverse_parent_child_relationship: bool = False
    force_one_to_many_in_non_flat: bool = False

    @property
    def duplicate_fields(self) -> list[str]:
        """Names of the database fields a sub type shares with its super type."""
        names = ["id"]
        if self.created_field is not None:
            names.append(self.created_field)
        if self.modified_field is not None:
            names.append(self.modified_field)
        return names

    @classmethod
    def from_env(cls, base: Optional["RegistryConfig"] = None) -> "RegistryConfig":
        """Build a config from ``UML_REGISTRY_*`` environment variables.

        Args:
            base: Config providing the defaults for unset variables

        Returns:
            New RegistryConfig instance
        """
        base = base or cls()
        values: dict[str, Any] = {}
        for name, field in cls.model_fields.items():
            key = ENV_PREFIX + name.upper()
            if field.annotation is bool:
                values[name] = getenv_bool(key, getattr(base, name))
            else:
                values[name] = getenv_optional_name(key, getattr(base, name))
        return cls(**values)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RegistryConfig":
        """Load config from a YAML file.

        Args:
            path: Path to a YAML mapping of option names to values

        Returns:
            New RegistryConfig instance
        """
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Registry config {path} must be a mapping, got {type(data).__name__}")

        logger.debug(f"Loaded registry config from {path}: {sorted(data)}")
        return cls.model_validate(data)
