"""
Frontend service data models.

Defines the :class:`Architecture` enum naming the three interchangeable
backends the visitor can switch between.  It inherits from ``str`` as well
as ``Enum`` so values round-trip through form fields and the session
cookie as plain strings.

Key Concepts Demonstrated:
- ``str``/``Enum`` dual inheritance for ergonomic serialisation
- Mapping an enum member to the configuration key that locates it
"""

from __future__ import annotations

from enum import Enum


class Architecture(str, Enum):
    """
    Backend architectures offered by the demo.

    Attributes:
        MONOLITH: Single process, one handler per endpoint.
        LAYERED: Single process, controller/service/repository layers.
        MICROSERVICES: Users and todos services behind the API gateway.
    """

    MONOLITH = "monolith"
    LAYERED = "layered"
    MICROSERVICES = "microservices"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def url_config_key(self) -> str:
        """Name of the config setting holding this backend's base URL."""
        return f"{self.name}_API_URL"

    @classmethod
    def parse(cls, raw: str | None, default: Architecture | None = None) -> Architecture | None:
        """Return the member whose value is *raw*, or *default*."""
        try:
            return cls(raw)
        except ValueError:
            return default
