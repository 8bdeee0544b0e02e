"""
Gateway role and route definitions for collaboration routing.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

ROUTE_DELIMITER = ","


class GatewayRole(Enum):
    """Position of this gateway on a request's route."""
    ORIGIN = "origin"
    RELAY = "relay"
    DESTINATION = "destination"

    def __str__(self) -> str:
        """Return string value of the role."""
        return self.value


@dataclass(frozen=True)
class Route:
    """Ordered center codes from origin to destination, both inclusive."""

    codes: Tuple[str, ...] = ()

    @classmethod
    def parse(cls, text: Optional[str]) -> "Route":
        """Split a comma-delimited route header. Empty or missing text is an empty route."""
        if not text:
            return cls()
        return cls(tuple(text.split(ROUTE_DELIMITER)))

    def find_index(self, code: str) -> Optional[int]:
        """Index of the first exact match, or None."""
        for index, candidate in enumerate(self.codes):
            if candidate == code:
                return index
        return None

    def __len__(self) -> int:
        return len(self.codes)

    def __bool__(self) -> bool:
        return bool(self.codes)

    def __str__(self) -> str:
        return ROUTE_DELIMITER.join(self.codes)
