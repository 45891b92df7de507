"""Infrastructure Layer — database sessions, credentials, tokens, logging.

Invariants:
    - Infrastructure never imports domain rules from core/ (errors and types only)
    - All store failures surface as StoreError

Design Decisions:
    - One module per concern: database, credentials, tokens, observability
"""
