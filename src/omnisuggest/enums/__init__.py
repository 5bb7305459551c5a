"""Enums for OmniSuggest."""

from omnisuggest.enums.enum_workbench import (
    EnumSessionStage,
    EnumWorkbenchOperation,
    EnumWorkbenchState,
)

__all__ = ["EnumSessionStage", "EnumWorkbenchOperation", "EnumWorkbenchState"]
