from __future__ import annotations

import threading
from typing import Callable

from fastapi import APIRouter, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from cadastro.core import csrf
from cadastro.core.config import Settings
from cadastro.services import user_form
from cadastro.services.user_form import FormState, UserFormController

router = APIRouter(tags=["users"])


def _get_controller(request: Request) -> UserFormController:
    ctrl = getattr(getattr(request.app, "state", None), "controller", None)
    if not ctrl:
        raise RuntimeError("UserFormController nao configurado")
    return ctrl


def _get_templates(request: Request) -> Jinja2Templates:
    tpl = getattr(getattr(request.app, "state", None), "templates", None)
    if tpl:
        return tpl
    raise RuntimeError("Templates nao configurados")


def _get_settings(request: Request) -> Settings:
    return request.app.state.settings


def _get_lock(request: Request) -> threading.Lock:
    lock = getattr(getattr(request.app, "state", None), "form_lock", None)
    if lock is None:
        raise RuntimeError("Lock do formulario nao configurado")
    return lock


def _state(request: Request) -> FormState:
    return getattr(request.app.state, "form_state", None) or FormState()


def _apply(request: Request, csrf_token: str, action: Callable[[FormState], FormState]) -> RedirectResponse:
    """Run one form action under the app lock, from state read to state write."""
    csrf.check_form_token(request, csrf_token)
    with _get_lock(request):
        state = _state(request)
        if not state.ready:
            raise HTTPException(503, "Banco de dados ainda carregando.")
        request.app.state.form_state = action(state)
    return RedirectResponse("/", status_code=303)


@router.get("/", response_class=HTMLResponse)
def index(request: Request):
    templates = _get_templates(request)
    csrf_token = csrf.issue_token(request)
    response = templates.TemplateResponse(
        request,
        "index.html",
        {"state": _state(request), "csrf_token": csrf_token},
    )
    csrf.attach_token(response, csrf_token, _get_settings(request))
    return response


@router.post("/users")
def submit(request: Request, name: str = Form(""), email: str = Form(""), csrf_token: str = Form("")):
    ctrl = _get_controller(request)
    return _apply(request, csrf_token, lambda state: ctrl.submit(user_form.with_fields(state, name, email)))


@router.post("/users/{user_id}/edit")
def select_for_edit(request: Request, user_id: int, csrf_token: str = Form("")):
    ctrl = _get_controller(request)

    def action(state: FormState) -> FormState:
        user = ctrl.repository.get_user(user_id)
        if not user:
            raise HTTPException(404, "Usuario nao encontrado")
        return user_form.select_for_edit(state, user)

    return _apply(request, csrf_token, action)


@router.post("/edit/cancel")
def cancel_edit(request: Request, csrf_token: str = Form("")):
    return _apply(request, csrf_token, user_form.cancel_edit)


@router.post("/users/{user_id}/delete")
def request_delete(request: Request, user_id: int, csrf_token: str = Form("")):
    return _apply(request, csrf_token, lambda state: user_form.request_delete(state, user_id))


@router.post("/delete/confirm")
def confirm_delete(request: Request, csrf_token: str = Form("")):
    return _apply(request, csrf_token, _get_controller(request).confirm_delete)


@router.post("/delete/cancel")
def cancel_delete(request: Request, csrf_token: str = Form("")):
    return _apply(request, csrf_token, user_form.cancel_delete)


@router.post("/notice/dismiss")
def dismiss_notice(request: Request, csrf_token: str = Form("")):
    return _apply(request, csrf_token, user_form.dismiss_notice)
