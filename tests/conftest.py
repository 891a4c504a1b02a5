from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Garante que o pacote cadastro seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from cadastro.repositories.sql_repository import UserRepository  # noqa: E402


@pytest.fixture()
def db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'test.db'}"


@pytest.fixture()
def repo(db_url):
    """UserRepository on a temporary SQLite file, disposed on teardown."""
    repository = UserRepository.from_url(db_url)
    repository.initialize()
    yield repository
    repository.dispose()
