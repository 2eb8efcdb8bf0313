"""CategoryRule class for maintenance interval definitions."""
import re
from typing import Optional

from .errors import ConfigurationError


def slugify(text: str) -> str:
    """Lowercase, underscore-separated key for a component label."""
    return re.sub(r"[^a-z0-9]+", "_", text.lower()).strip("_")


class CategoryRule:
    """A maintenance category and the intervals between its services."""

    def __init__(
            self,
            component: str,
            mileage_interval: float,
            time_interval_months: float,
            description: Optional[str] = None,
            key: Optional[str] = None,
    ):
        self.component = component
        self.mileage_interval = mileage_interval
        self.time_interval_months = time_interval_months
        self._description = description
        self._key = key

    def __repr__(self) -> str:
        return (
            f"CategoryRule({self.component!r}, {self.mileage_interval!r}, "
            f"{self.time_interval_months!r})"
        )

    @property
    def key(self) -> str:
        """Category key used to look up service history (e.g. 'engine_oil')."""
        return self._key or slugify(self.component)

    @property
    def description(self) -> str:
        return self._description or f"{self.component} service required"

    def validate(self) -> None:
        """Raise ConfigurationError unless both intervals are positive."""
        if not self.mileage_interval or self.mileage_interval <= 0:
            raise ConfigurationError(
                f"{self.component}: mileage interval must be positive "
                f"(got {self.mileage_interval})",
                rule=self.key,
            )
        if not self.time_interval_months or self.time_interval_months <= 0:
            raise ConfigurationError(
                f"{self.component}: time interval must be positive "
                f"(got {self.time_interval_months})",
                rule=self.key,
            )
