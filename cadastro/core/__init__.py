"""
Core utilities shared across the cadastro app.

This package hosts configuration helpers (env vars, database URL) and
cross-cutting concerns such as CSRF protection for the form posts.
"""
