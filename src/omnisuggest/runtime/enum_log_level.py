# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Log levels accepted by ``OMNISUGGEST_LOG_LEVEL`` and ``--log-level``."""

import logging
from enum import StrEnum


class EnumLogLevel(StrEnum):
    """Entry point log level, matched case-insensitively."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @classmethod
    def _missing_(cls, value: object) -> "EnumLogLevel | None":
        if isinstance(value, str):
            return cls.__members__.get(value.strip().upper())
        return None

    @property
    def numeric(self) -> int:
        """The matching ``logging`` module level."""
        return logging.getLevelNamesMapping()[self.value]


__all__ = ["EnumLogLevel"]
