"""Configuration source interface (Port)."""

from abc import ABC, abstractmethod
from typing import Optional


class ConfigurationSource(ABC):
    """
    Port for the key/value property store holding gateway settings.

    Implementations raise any exception when the backing store cannot
    be reached; callers translate that into ConfigurationError.
    """

    @abstractmethod
    def get_property(self, name: str) -> Optional[str]:
        """
        Retrieve the raw value of a property.

        Args:
            name: Fully qualified property name

        Returns:
            Raw string value, or None if the property is not set
        """
        pass
