"""Utility script to create the users table for the configured DATABASE_URL."""
from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError

from cadastro.core.config import get_settings
from cadastro.repositories.sql_repository import UserRepository


def create_all(url: str | None = None) -> None:
    repo = UserRepository.from_url(url or get_settings().database_url)
    try:
        repo.initialize()
    finally:
        repo.dispose()


if __name__ == "__main__":
    try:
        create_all()
        print("Database tables created successfully.")
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
