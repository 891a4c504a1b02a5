"""
Application factory for the cadastro page.

Run with uvicorn in factory mode::

    uvicorn cadastro.app:create_app --factory
"""
import logging
import os
import threading
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.templating import Jinja2Templates
from sqlalchemy.exc import SQLAlchemyError

from cadastro.core.config import Settings, get_settings
from cadastro.repositories.sql_repository import UserRepository
from cadastro.routers import users as users_router
from cadastro.services.user_form import FormState, UserFormController

logger = logging.getLogger(__name__)

BASE = os.path.dirname(__file__)
TEMPLATES_DIR = os.path.join(BASE, "templates")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the store once; on failure the page stays in the loading state."""
    controller: UserFormController = app.state.controller
    try:
        app.state.form_state = controller.start()
    except SQLAlchemyError:
        logger.exception("Nao foi possivel abrir o banco de dados em %s", app.state.settings.database_url)
        app.state.form_state = FormState()
    yield


def create_app(settings: Optional[Settings] = None, repository: Optional[UserRepository] = None) -> FastAPI:
    """Factory compatível com uvicorn/gunicorn."""
    settings = settings or get_settings()
    repository = repository or UserRepository.from_url(settings.database_url)

    app = FastAPI(title="Cadastro de Usuarios", lifespan=lifespan)
    app.state.settings = settings
    app.state.controller = UserFormController(repository)
    app.state.form_state = FormState()
    # form posts run in the threadpool; actions on form_state go one at a time
    app.state.form_lock = threading.Lock()
    app.state.templates = Jinja2Templates(directory=TEMPLATES_DIR)

    app.include_router(users_router.router)
    return app
