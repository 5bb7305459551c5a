"""Pattern Store Handlers.

Pure functions used by the pattern store:

    - compute_structural_complexity: structural complexity delta of a snippet
    - validate_seed_pairs: batch validation of (snippet, language) pairs
    - load_seed_file: YAML seed file reader
"""

from omnisuggest.nodes.node_pattern_store_effect.handlers.handler_complexity import (
    BRANCH_WEIGHT,
    CALL_WEIGHT,
    NESTING_WEIGHT,
    TOKEN_WEIGHT,
    ComplexityBreakdown,
    compute_structural_complexity,
)
from omnisuggest.nodes.node_pattern_store_effect.handlers.handler_seed import (
    SeedPair,
    load_seed_file,
    validate_seed_pairs,
)

__all__ = [
    "BRANCH_WEIGHT",
    "CALL_WEIGHT",
    "NESTING_WEIGHT",
    "TOKEN_WEIGHT",
    "ComplexityBreakdown",
    "SeedPair",
    "compute_structural_complexity",
    "load_seed_file",
    "validate_seed_pairs",
]
