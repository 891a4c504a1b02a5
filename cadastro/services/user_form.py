"""
Form/list use cases for the registration screen.

FormState is an immutable snapshot of everything the page renders. The
module-level transition functions never touch the store; UserFormController
is the only place that calls the repository, and it always reloads the whole
list after a mutation.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from cadastro.domain.emails import is_valid_email
from cadastro.domain.records import UserRecord
from cadastro.repositories.sql_repository import UserRepository


class UserFormError(Exception):
    """Base class for validation failures shown to the user as a notice."""

    title = "Atenção"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingFieldsError(UserFormError):
    def __init__(self) -> None:
        super().__init__("Nome e E-mail são obrigatórios!")


class InvalidEmailError(UserFormError):
    title = "E-mail Inválido"

    def __init__(self) -> None:
        super().__init__("Por favor, digite um e-mail válido (ex: teste@email.com)")


@dataclass(frozen=True)
class Notice:
    title: str
    message: str


@dataclass(frozen=True)
class FormState:
    name: str = ""
    email: str = ""
    editing_id: Optional[int] = None
    users: tuple[UserRecord, ...] = ()
    ready: bool = False
    notice: Optional[Notice] = None
    pending_delete: Optional[int] = None

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    @property
    def title(self) -> str:
        return "Editar Usuário" if self.is_editing else "Novo Cadastro"

    @property
    def submit_label(self) -> str:
        return "Salvar Alterações" if self.is_editing else "Cadastrar"

    @property
    def user_count(self) -> int:
        return len(self.users)


def validate_user_form(name: str | None, email: str | None) -> None:
    """Raise a UserFormError when the fields cannot be saved."""
    if not name or not email:
        raise MissingFieldsError()
    if not is_valid_email(email):
        raise InvalidEmailError()


# -------------------------- transitions --------------------------
def with_fields(state: FormState, name: str, email: str) -> FormState:
    return replace(state, name=name, email=email)


def clear_form(state: FormState) -> FormState:
    return replace(state, name="", email="", editing_id=None)


def select_for_edit(state: FormState, user: UserRecord) -> FormState:
    """Enter edit mode: pin the record id and pre-fill the fields."""
    return replace(state, name=user.name, email=user.email, editing_id=user.id)


def cancel_edit(state: FormState) -> FormState:
    return clear_form(state)


def request_delete(state: FormState, user_id: int) -> FormState:
    return replace(state, pending_delete=user_id)


def cancel_delete(state: FormState) -> FormState:
    return replace(state, pending_delete=None)


def dismiss_notice(state: FormState) -> FormState:
    return replace(state, notice=None)


class UserFormController:
    """Runs the submit/delete flows against the repository."""

    def __init__(self, repository: UserRepository) -> None:
        self.repository = repository

    def start(self) -> FormState:
        """Open the store and load the list; store errors propagate."""
        self.repository.initialize()
        return replace(self.reload(FormState()), ready=True)

    def reload(self, state: FormState) -> FormState:
        return replace(state, users=tuple(self.repository.list_users()))

    def submit(self, state: FormState) -> FormState:
        try:
            validate_user_form(state.name, state.email)
        except UserFormError as exc:
            return replace(state, notice=Notice(exc.title, exc.message))
        if not state.ready:
            return state
        if state.editing_id is not None:
            self.repository.update_user(state.name, state.email, state.editing_id)
        else:
            self.repository.insert_user(state.name, state.email)
        return clear_form(self.reload(state))

    def confirm_delete(self, state: FormState) -> FormState:
        user_id = state.pending_delete
        if user_id is None or not state.ready:
            return cancel_delete(state)
        self.repository.delete_user(user_id)
        state = cancel_delete(self.reload(state))
        if state.editing_id == user_id:
            state = clear_form(state)
        return state
