"""Database service for read-only mapping template lookup."""

from __future__ import annotations

import json
import logging

from sqlalchemy import Engine, text
from sqlalchemy.exc import SQLAlchemyError

from balanzia.domain import StorageUnavailableError
from balanzia.mapping import MappingTemplate, mapping_build_template

from .interfaces import MappingTemplateRepositoryPort

logger = logging.getLogger(__name__)


class SQLAlchemyMappingTemplateService(MappingTemplateRepositoryPort):
    """SQLAlchemy implementation of mapping template reads.

    Template create/update/delete belongs to the template management surface and
    is not exposed here.
    """

    def __init__(self, engine: Engine):
        if engine is None:
            raise ValueError("engine must not be None")

        self._engine = engine

    def db_mapping_template_get_by_name(self, name: str) -> MappingTemplate | None:
        """Return one mapping template by name.

        Args:
            name: Template name.

        Returns:
            MappingTemplate | None: Validated template, or None when absent.

        Raises:
            ValueError: Raised when name is blank or the stored configuration is invalid.
            StorageUnavailableError: Raised when read operation fails.
        """

        normalized_name = name.strip() if isinstance(name, str) else ""
        if not normalized_name:
            raise ValueError("name must not be blank")

        try:
            with self._engine.connect() as connection:
                row = connection.execute(
                    text("SELECT name, file_kind, field_aliases FROM mapping_template WHERE name = :name"),
                    {"name": normalized_name},
                ).mappings().fetchone()
        except SQLAlchemyError as error:
            raise StorageUnavailableError("mapping template read failed") from error

        if row is None:
            return None

        field_aliases = row["field_aliases"]
        if isinstance(field_aliases, str):
            field_aliases = json.loads(field_aliases)
        if not isinstance(field_aliases, dict):
            raise ValueError(f"mapping_template.field_aliases for {normalized_name} must be a JSON object")

        template = mapping_build_template(
            name=row["name"],
            file_kind=row["file_kind"],
            field_aliases=field_aliases,
        )
        logger.debug("mapping template loaded name=%s fields=%s", template.name, sorted(template.field_aliases))
        return template
