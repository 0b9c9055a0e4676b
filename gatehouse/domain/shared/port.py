"""Marker base for domain ports.

Ports are ``typing.Protocol`` classes that the domain depends on and the
infrastructure layer implements.
"""

from typing import Protocol


class Port(Protocol):
    """Base for all ports (repositories, stores, registries)."""
