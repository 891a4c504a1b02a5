"""
FastAPI routers for the cadastro app.

Each module exposes an APIRouter included by app.create_app().
"""
