"""
Use cases for the cadastro app.

Routers call these services instead of issuing statements against the
store directly.
"""
