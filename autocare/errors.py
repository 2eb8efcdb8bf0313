"""Exceptions raised by the recommendation engine."""

from typing import Optional


class ConfigurationError(ValueError):
    """A rule, rules file or vehicle file is unusable (e.g. non-positive interval)."""

    def __init__(self, message: str, rule: Optional[str] = None):
        super().__init__(message)
        self.rule = rule
