"""OmniSuggest nodes.

Each node package pairs pure handler functions with the stateful component
that uses them:

    - node_pattern_store_effect: PatternStore (storage, analysis, seeding)
    - node_pattern_ranking_compute: Matcher (request-to-pattern ranking)
    - node_workbench_reducer: Workbench (per-session state machine)
    - node_session_orchestrator: SessionOrchestrator (pipeline, Session API)
"""
