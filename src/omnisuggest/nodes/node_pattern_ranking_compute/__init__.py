# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Pattern Ranking Compute Node."""

from omnisuggest.nodes.node_pattern_ranking_compute.matcher import Matcher

__all__ = ["Matcher"]
