"""
Slug Routes — Middleware Package
================================

Middleware Chain (order matters):
    Request → [Request ID] → [Logging] → Route Handler (bindings run here)

    Request ID runs first so the access log line and any NotFoundError
    response carry the same ID.
"""
