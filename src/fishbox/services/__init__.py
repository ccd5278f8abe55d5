"""
Shared service utilities.

- http.py - requests session factory with retry/backoff and default timeout
"""
