"""
ProvisionRequest: one variable, one desired value, one call.

A request is built by the caller per invocation and never mutated.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PLACEHOLDERS: frozenset[str] = frozenset({"<API_KEY>"})
DEFAULT_TOOL = "shellenv"

SettingsLookup = Callable[[], str | None]


class ProvisionRequest(BaseModel):
    """Everything the provisioner needs to decide and act for one variable."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    variable_name: str
    desired_value: str | None = None
    placeholder_values: frozenset[str] = DEFAULT_PLACEHOLDERS
    explicit_profile_path: Path | None = None
    settings_lookup: Callable[[], str | None] | None = Field(default=None, exclude=True)

    # Marker text: "# <tool>: <label> env start"
    tool: str = DEFAULT_TOOL
    label: str | None = None

    # Wording for the "missing ..." skip message.
    value_label: str = "API key"

    def normalize(self, value: str | None) -> str | None:
        """Trim a candidate value; blank or placeholder values become None."""
        if not value:
            return None
        trimmed = value.strip()
        if not trimmed or trimmed in self.placeholder_values:
            return None
        return trimmed

    def lookup_settings(self) -> str | None:
        """Value from the settings capability, normalized."""
        if self.settings_lookup is None:
            return None
        return self.normalize(self.settings_lookup())

    @property
    def marker_label(self) -> str:
        return self.label or self.variable_name
