"""FishBox - catch log, spot clustering and leaderboard engine for anglers.

Architecture::

    schemas.py     Canonical Catch record + creation/patch payloads (pydantic)
    backends/      Persistence collaborators (in-memory, PostgREST) + row mapping
    store.py       Per-session Catch Store (confirm-then-mutate, load tokens)
    aggregation/   Pure derived views (species, spots, leaderboard, timeline, summary)
    social.py      Likes, comments, friendships, public feed
    datasources/   External HTTP APIs (Open-Meteo weather, Nominatim geocoding)
    snapshots.py   JSON snapshot files with TTL for batch-derived views
    flows/         Prefect orchestration (leaderboard snapshots)

Data flow: backend → store (load) → aggregation → CLI / snapshots.

Extension points:
  - New derived view:  aggregation/__init__.py
  - New backend:       backends/__init__.py
"""

__version__ = "0.1.0"

from fishbox.config import Settings
from fishbox.schemas import Catch, CatchInput, CatchPatch

__all__ = ["Catch", "CatchInput", "CatchPatch", "Settings", "__version__"]
