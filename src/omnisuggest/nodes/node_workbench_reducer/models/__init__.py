"""Models for Workbench Reducer Node."""

from omnisuggest.nodes.node_workbench_reducer.models.model_refinement_context import (
    ModelRefinementContext,
)

__all__ = ["ModelRefinementContext"]
