# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Runtime configuration and component wiring for OmniSuggest."""

from omnisuggest.runtime.enum_log_level import EnumLogLevel
from omnisuggest.runtime.settings import OmniSuggestSettings
from omnisuggest.runtime.wiring import (
    LOG_FORMAT,
    build_ledger_client,
    build_orchestrator,
    build_pattern_store,
    configure_logging,
)

__all__ = [
    "LOG_FORMAT",
    "EnumLogLevel",
    "OmniSuggestSettings",
    "build_ledger_client",
    "build_orchestrator",
    "build_pattern_store",
    "configure_logging",
]
