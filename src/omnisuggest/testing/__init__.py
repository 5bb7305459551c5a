# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Testing utilities for omnisuggest.

Modules:
    mock_ledger: Ledger client with scripted timeouts and failures
"""

from omnisuggest.testing.mock_ledger import MockLedgerClient

__all__ = ["MockLedgerClient"]
