# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Session Orchestrator Node."""

from omnisuggest.nodes.node_session_orchestrator.models import (
    ModelOrchestratorConfig,
    ModelSessionHandle,
    ModelSessionResult,
)
from omnisuggest.nodes.node_session_orchestrator.orchestrator import (
    SessionOrchestrator,
    SessionRef,
)

__all__ = [
    "ModelOrchestratorConfig",
    "ModelSessionHandle",
    "ModelSessionResult",
    "SessionOrchestrator",
    "SessionRef",
]
