"""External HTTP data sources used when a catch is logged.

Each subdirectory is one source::

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs, constants, lookups (optional)
    └── {feature}.py      # Fetch functions

Fetch functions use the shared retrying session from ``services/http.py``
and let ``requests`` errors propagate; callers that treat a source as
optional (see ``enrichment.py``) catch them.
"""
