"""
Service layer abstraction.

Each service encapsulates business logic for a domain.  Services get
their collaborators (record store, upload storage, identity provider)
at construction, so tests can hand them in‑memory doubles and the
storage backend can change without touching the API handlers.
"""
