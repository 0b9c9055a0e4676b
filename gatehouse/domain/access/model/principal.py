"""Principal records owned by the principal stores.

Users and applications are persisted by collaborators outside this domain;
these models describe the attributes the access domain reads from them.
"""

from gatehouse.domain.access.model.value import PrincipalId
from gatehouse.domain.shared.model.entity import Entity


class User(Entity):
    """An end user. `username` and `email` are alternate unique keys."""

    id: PrincipalId | None = None
    username: str | None = None
    email: str | None = None
    name: str | None = None


class Application(Entity):
    """A registered application/service credential. `name` is unique."""

    id: PrincipalId | None = None
    name: str | None = None
    description: str | None = None
