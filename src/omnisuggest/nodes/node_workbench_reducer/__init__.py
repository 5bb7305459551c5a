# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Workbench Reducer Node."""

from omnisuggest.nodes.node_workbench_reducer.workbench import (
    Workbench,
    WorkbenchTransition,
)

__all__ = ["Workbench", "WorkbenchTransition"]
