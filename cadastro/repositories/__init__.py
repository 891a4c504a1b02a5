"""
Persistence adapters.

Services depend on UserRepository instead of touching SQLAlchemy sessions
directly; every method runs a single statement in its own session.
"""
