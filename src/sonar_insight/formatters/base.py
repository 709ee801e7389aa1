"""Base formatter interface for Sonar Insight artifact rendering."""

from abc import ABC, abstractmethod
from typing import Any


def to_plain(data: Any) -> Any:
    """Convert result objects (anything with ``to_dict``) into plain data."""
    if hasattr(data, "to_dict"):
        return data.to_dict()
    return data


def is_comparison(data: Any) -> bool:
    return isinstance(data, dict) and "qualityGateChange" in data and "summary" in data


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    name: str = ""
    extension: str = ""

    @abstractmethod
    def format(self, data: Any) -> str:
        """Return the formatted string representation of ``data``."""

    def render(self, data: Any) -> None:
        print(self.format(data), end="")
