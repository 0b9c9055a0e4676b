"""Model registry over SQLAlchemy tables.

Model classes are `Table` objects. Belongs-to relations are read from the
tables' `ForeignKey` declarations, so any table with a foreign key to
``users.id`` takes part in OWNER resolution without extra configuration.
"""

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import Table, select
from sqlalchemy.ext.asyncio import AsyncSession

from gatehouse.domain.access.model.value import PrincipalType
from gatehouse.domain.access.port.model_registry import ModelRegistry
from gatehouse.infrastructure.persistence.repository.principal import (
    NO_MATCH,
    bind_value,
    primary_key_column,
)
from gatehouse.infrastructure.persistence.tables import (
    applications_table,
    roles_table,
    users_table,
)

logger = logging.getLogger(__name__)

PRINCIPAL_TABLES: dict[PrincipalType, Table] = {
    PrincipalType.USER: users_table,
    PrincipalType.APPLICATION: applications_table,
    PrincipalType.ROLE: roles_table,
}


class SQLAlchemyModelRegistry(ModelRegistry):
    """ModelRegistry that loads rows through the unit of work's session."""

    def __init__(
        self,
        session: AsyncSession,
        principal_tables: Mapping[PrincipalType, Table] = PRINCIPAL_TABLES,
    ) -> None:
        self._session = session
        self._principal_tables = dict(principal_tables)

    async def get_model(self, model_class: Any, model_id: Any) -> dict | None:
        if not isinstance(model_class, Table):
            logger.warning("Not a table: %r", model_class)
            return None

        pk = primary_key_column(model_class)
        key = bind_value(pk, model_id)
        if key is NO_MATCH:
            return None

        result = await self._session.execute(select(model_class).where(pk == key))
        row = result.mappings().first()
        return dict(row) if row else None

    def belongs_to(self, model_class: Any, principal_type: PrincipalType) -> list[str]:
        target = self._principal_tables.get(principal_type)
        if target is None or not isinstance(model_class, Table):
            return []
        return [
            column.name
            for column in model_class.columns
            for fk in column.foreign_keys
            if fk.target_fullname.rsplit(".", 1)[0] == target.fullname
        ]

    def model_for(self, principal_type: PrincipalType) -> Table | None:
        return self._principal_tables.get(principal_type)
