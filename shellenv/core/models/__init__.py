"""
Domain models: pydantic types for the provisioning engine.

All models are re-exported here for convenient access:

    from shellenv.core.models import ProvisionRequest, ProvisionResult, ShellDialect
"""

from shellenv.core.models.config import SettingsSource, ShellenvConfig, VariableSpec
from shellenv.core.models.dialect import ShellDialect
from shellenv.core.models.environment import EnvironmentSnapshot
from shellenv.core.models.profile import MarkedBlock, ProfileDocument
from shellenv.core.models.request import (
    DEFAULT_PLACEHOLDERS,
    DEFAULT_TOOL,
    ProvisionRequest,
    SettingsLookup,
)
from shellenv.core.models.result import ProvisionResult

__all__ = [
    # request.py
    "DEFAULT_PLACEHOLDERS",
    "DEFAULT_TOOL",
    # environment.py
    "EnvironmentSnapshot",
    # profile.py
    "MarkedBlock",
    "ProfileDocument",
    "ProvisionRequest",
    # result.py
    "ProvisionResult",
    "SettingsLookup",
    # config.py
    "SettingsSource",
    # dialect.py
    "ShellDialect",
    "ShellenvConfig",
    "VariableSpec",
]
