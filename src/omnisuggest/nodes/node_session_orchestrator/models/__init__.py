"""Models for the Session Orchestrator Node."""

from omnisuggest.nodes.node_session_orchestrator.models.model_session import (
    ModelOrchestratorConfig,
    ModelSessionHandle,
    ModelSessionResult,
)

__all__ = ["ModelOrchestratorConfig", "ModelSessionHandle", "ModelSessionResult"]
