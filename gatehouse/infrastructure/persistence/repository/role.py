"""SQLAlchemy implementations of RoleRepository and RoleMappingRepository."""

from uuid import UUID

from sqlalchemy import delete, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from gatehouse.domain.access.model.role import Role, duplicate_role_name
from gatehouse.domain.access.model.role_mapping import RoleMapping
from gatehouse.domain.access.model.value import (
    PrincipalType,
    RoleId,
    RoleMappingId,
    principal_key,
)
from gatehouse.domain.access.port.repository import (
    RoleFilter,
    RoleMappingFilter,
    RoleMappingRepository,
    RoleRepository,
)
from gatehouse.infrastructure.persistence.tables import role_mappings_table, roles_table


def _row_to_role(row: dict) -> Role:
    """Convert a database row to a Role model."""
    return Role(
        id=RoleId(UUID(row["id"])),
        name=row["name"],
        description=row["description"],
        created_at=row["created_at"],
    )


def _role_to_dict(role: Role) -> dict:
    """Convert a Role model to a database row dict."""
    return {
        "id": str(role.id),
        "name": role.name,
        "description": role.description,
        "created_at": role.created_at,
    }


def _row_to_mapping(row: dict) -> RoleMapping:
    """Convert a database row to a RoleMapping model."""
    return RoleMapping(
        id=RoleMappingId(UUID(row["id"])),
        role_id=RoleId(UUID(row["role_id"])),
        principal_type=PrincipalType(row["principal_type"]),
        principal_id=row["principal_id"],
        created_at=row["created_at"],
    )


def _mapping_to_dict(mapping: RoleMapping) -> dict:
    """Convert a RoleMapping model to a database row dict."""
    return {
        "id": str(mapping.id),
        "role_id": str(mapping.role_id),
        "principal_type": mapping.principal_type.value,
        "principal_id": principal_key(mapping.principal_id),
        "created_at": mapping.created_at,
    }


def _mapping_conditions(mapping_filter: RoleMappingFilter) -> list:
    conditions = []
    if mapping_filter.role_id is not None:
        conditions.append(role_mappings_table.c.role_id == str(mapping_filter.role_id))
    if mapping_filter.principal_type is not None:
        conditions.append(
            role_mappings_table.c.principal_type == PrincipalType(mapping_filter.principal_type).value
        )
    if mapping_filter.principal_id is not None:
        # Stored in canonical string form, so this is loose id equality
        conditions.append(
            role_mappings_table.c.principal_id == principal_key(mapping_filter.principal_id)
        )
    return conditions


class SQLAlchemyRoleRepository(RoleRepository):
    """SQLAlchemy implementation of RoleRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def save(self, role: Role) -> None:
        stmt = insert(roles_table).values(**_role_to_dict(role))
        try:
            await self.session.execute(stmt)
            await self.session.flush()
        except IntegrityError as e:
            # Lost a race against a concurrent create with the same name
            raise duplicate_role_name(role.name) from e

    async def get(self, role_id: RoleId) -> Role | None:
        stmt = select(roles_table).where(roles_table.c.id == str(role_id))
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return _row_to_role(dict(row)) if row else None

    async def get_by_name(self, name: str) -> Role | None:
        stmt = select(roles_table).where(roles_table.c.name == name)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return _row_to_role(dict(row)) if row else None

    async def find(self, role_filter: RoleFilter | None = None) -> list[Role]:
        role_filter = role_filter or RoleFilter()
        stmt = select(roles_table).order_by(roles_table.c.name)

        if role_filter.name is not None:
            stmt = stmt.where(roles_table.c.name == role_filter.name)
        if role_filter.ids is not None:
            stmt = stmt.where(roles_table.c.id.in_([str(i) for i in role_filter.ids]))
        if role_filter.offset:
            stmt = stmt.offset(role_filter.offset)
        if role_filter.limit is not None:
            stmt = stmt.limit(role_filter.limit)

        result = await self.session.execute(stmt)
        return [_row_to_role(dict(row)) for row in result.mappings().all()]


class SQLAlchemyRoleMappingRepository(RoleMappingRepository):
    """SQLAlchemy implementation of RoleMappingRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def save(self, mapping: RoleMapping) -> None:
        stmt = insert(role_mappings_table).values(**_mapping_to_dict(mapping))
        await self.session.execute(stmt)
        await self.session.flush()

    async def find(self, mapping_filter: RoleMappingFilter) -> list[RoleMapping]:
        stmt = (
            select(role_mappings_table)
            .where(*_mapping_conditions(mapping_filter))
            .order_by(role_mappings_table.c.created_at, role_mappings_table.c.id)
        )
        result = await self.session.execute(stmt)
        return [_row_to_mapping(dict(row)) for row in result.mappings().all()]

    async def delete(self, mapping_filter: RoleMappingFilter) -> int:
        stmt = delete(role_mappings_table).where(*_mapping_conditions(mapping_filter))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
