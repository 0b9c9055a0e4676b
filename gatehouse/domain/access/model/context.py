"""Resolution context passed into every membership check."""

from dataclasses import dataclass
from typing import Any

from gatehouse.domain.access.model.value import PrincipalId, PrincipalType


@dataclass(frozen=True)
class ResolutionContext:
    """Who is asking, and optionally which entity they are asking about.

    `model_class` / `model_id` are only set for ownership checks. What a
    model class is depends on the ModelRegistry in use (a Python class for
    the in-memory registry, a SQLAlchemy Table for the SQL one).
    """

    principal_type: PrincipalType
    principal_id: PrincipalId | None = None
    model_class: Any = None
    model_id: Any = None

    @property
    def is_authenticated(self) -> bool:
        """A concrete user or application is making the request."""
        return self.principal_id is not None and self.principal_type in (
            PrincipalType.USER,
            PrincipalType.APPLICATION,
        )

    @property
    def targets_model(self) -> bool:
        return self.model_class is not None and self.model_id is not None


@dataclass(frozen=True)
class PrincipalReference:
    """A principal named by id or by an alternate unique attribute."""

    principal_type: PrincipalType
    key: Any
