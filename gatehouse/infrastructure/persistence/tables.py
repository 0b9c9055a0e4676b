"""SQLAlchemy table definitions - dialect-agnostic (works with SQLite and PostgreSQL)."""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE (Principal store)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("username", String(255), nullable=True, unique=True),
    Column("email", String(255), nullable=True, unique=True),
    Column("name", String(255), nullable=True),
)


# ============================================================================
# APPLICATIONS TABLE (Principal store)
# ============================================================================
applications_table = Table(
    "applications",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=True, unique=True),
    Column("description", Text, nullable=True),
)


# ============================================================================
# ROLES TABLE
# ============================================================================
roles_table = Table(
    "roles",
    metadata,
    Column("id", String, primary_key=True),  # UUID as string
    Column("name", String(255), nullable=False, unique=True),
    Column("description", Text, nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
)


# ============================================================================
# ROLE MAPPINGS TABLE (static principal -> role assignments)
# ============================================================================
role_mappings_table = Table(
    "role_mappings",
    metadata,
    Column("id", String, primary_key=True),  # UUID as string
    Column("role_id", String, ForeignKey("roles.id", ondelete="CASCADE"), nullable=False),
    Column("principal_type", String(32), nullable=False),  # PrincipalType value
    Column("principal_id", String, nullable=False),  # Canonical string form (principal_key)
    Column("created_at", DateTime(timezone=True), nullable=False),
    # No uniqueness: duplicate assignments are allowed
)

Index("ix_role_mappings_role_id", role_mappings_table.c.role_id)
Index(
    "ix_role_mappings_principal",
    role_mappings_table.c.principal_type,
    role_mappings_table.c.principal_id,
)
