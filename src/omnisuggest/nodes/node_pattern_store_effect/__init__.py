# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Pattern Store Effect Node."""

from omnisuggest.nodes.node_pattern_store_effect.store import (
    PatternStore,
    PatternStoreView,
)

__all__ = ["PatternStore", "PatternStoreView"]
