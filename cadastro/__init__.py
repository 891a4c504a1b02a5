"""Cadastro de usuarios: single-screen registration form backed by SQLite."""
