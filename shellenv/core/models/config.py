"""
Configuration models: the validated shape of ``shellenv.yml``.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from shellenv.core.models.request import DEFAULT_PLACEHOLDERS, DEFAULT_TOOL, ProvisionRequest


class SettingsSource(BaseModel):
    """Where to look up a value when none is given explicitly."""

    file: str | None = None                 # JSON sidecar path (~ allowed)
    key: str = "env.ANTHROPIC_API_KEY"      # dotted path inside the document


class VariableSpec(BaseModel):
    """One variable the tool knows how to provision."""

    name: str
    label: str | None = None                # marker label, default: name
    value: str | None = None                # explicit value (rarely committed)
    settings_key: str | None = None         # overrides SettingsSource.key
    placeholders: list[str] = Field(default_factory=lambda: sorted(DEFAULT_PLACEHOLDERS))
    value_label: str = "API key"

    @field_validator("name")
    @classmethod
    def _valid_name(cls, v: str) -> str:
        v = v.strip()
        if not v or not (v[0].isalpha() or v[0] == "_") or not v.replace("_", "").isalnum():
            raise ValueError(f"Invalid environment variable name: {v!r}")
        return v


class ShellenvConfig(BaseModel):
    """Root configuration."""

    tool: str = DEFAULT_TOOL
    profile: str | None = None              # force a profile path
    settings: SettingsSource = Field(default_factory=SettingsSource)
    variables: list[VariableSpec] = Field(default_factory=list)

    def get_variable(self, name: str) -> VariableSpec | None:
        for var in self.variables:
            if var.name == name:
                return var
        return None

    def build_request(
        self,
        spec: VariableSpec,
        value: str | None = None,
        profile: Path | None = None,
    ) -> ProvisionRequest:
        """Turn a variable spec into a ProvisionRequest.

        Command-line ``value``/``profile`` take precedence over the file.
        """
        from shellenv.core.persistence.settings_file import settings_lookup

        lookup = None
        if self.settings.file:
            key = spec.settings_key or self.settings.key
            lookup = settings_lookup(Path(self.settings.file), key)

        explicit = profile or (Path(self.profile).expanduser() if self.profile else None)
        return ProvisionRequest(
            variable_name=spec.name,
            desired_value=value if value is not None else spec.value,
            placeholder_values=frozenset(spec.placeholders),
            explicit_profile_path=explicit,
            settings_lookup=lookup,
            tool=self.tool,
            label=spec.label,
            value_label=spec.value_label,
        )
