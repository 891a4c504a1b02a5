"""Database helpers (engine/session factories and the users table)."""

from .session import Base, build_engine, build_sessionmaker, session_scope

__all__ = ["Base", "build_engine", "build_sessionmaker", "session_scope"]
