"""
Prefect flows for batch-derived views.

Flows:
- leaderboard: public catches -> ranked leaderboards -> snapshot files

Usage (local):
    python -m fishbox.flows.leaderboard

Usage (Prefect):
    prefect server start  # Optional, for dashboard
    prefect deployment run 'build-leaderboards/default'
"""
