from __future__ import annotations

import pytest

from cadastro.services import user_form
from cadastro.services.user_form import (
    FormState,
    InvalidEmailError,
    MissingFieldsError,
    UserFormController,
    validate_user_form,
)


@pytest.fixture()
def ctrl(repo):
    return UserFormController(repo)


@pytest.fixture()
def ready(ctrl):
    return ctrl.start()


def _submit(ctrl, state, name, email):
    return ctrl.submit(user_form.with_fields(state, name, email))


def test_start_marks_ready_and_loads_existing_records(repo, ctrl):
    repo.insert_user("Ana", "ana@mail.com")
    state = ctrl.start()
    assert state.ready is True
    assert [u.name for u in state.users] == ["Ana"]
    assert state.is_editing is False
    assert state.submit_label == "Cadastrar"


@pytest.mark.parametrize(
    "name,email,error",
    [
        ("", "ana@mail.com", MissingFieldsError),
        ("Ana", "", MissingFieldsError),
        ("Ana", "abc", InvalidEmailError),
        ("Ana", "a@b", InvalidEmailError),
        ("Ana", "a@b.com ", InvalidEmailError),
    ],
)
def test_validation_rejects_bad_input(name, email, error):
    with pytest.raises(error):
        validate_user_form(name, email)


@pytest.mark.parametrize("name,email", [("", "ana@mail.com"), ("Ana", ""), ("Ana", "a@b")])
def test_invalid_submit_shows_notice_without_mutation(repo, ctrl, ready, name, email):
    state = _submit(ctrl, ready, name, email)
    assert state.notice is not None
    assert state.name == name
    assert state.email == email
    assert repo.list_users() == []
    assert state.users == ()


def test_missing_fields_notice_text(ctrl, ready):
    state = _submit(ctrl, ready, "", "")
    assert state.notice.title == "Atenção"
    assert state.notice.message == "Nome e E-mail são obrigatórios!"
    assert user_form.dismiss_notice(state).notice is None


def test_submit_before_ready_does_nothing(repo, ctrl):
    state = _submit(ctrl, FormState(), "Ana", "ana@mail.com")
    assert state.ready is False
    assert repo.list_users() == []


def test_create_mode_submit_inserts_and_clears(repo, ctrl, ready):
    state = _submit(ctrl, ready, "Ana", "a@b.co")
    assert (state.name, state.email, state.editing_id) == ("", "", None)
    assert len(state.users) == 1
    assert state.users[0].name == "Ana"
    assert state.users == tuple(repo.list_users())


def test_select_then_cancel_restores_create_mode(repo, ctrl, ready):
    state = _submit(ctrl, ready, "Ana", "ana@mail.com")
    editing = user_form.select_for_edit(state, state.users[0])
    assert editing.is_editing
    assert (editing.name, editing.email) == ("Ana", "ana@mail.com")
    assert editing.title == "Editar Usuário"
    assert editing.submit_label == "Salvar Alterações"

    cancelled = user_form.cancel_edit(editing)
    assert cancelled.is_editing is False
    assert (cancelled.name, cancelled.email) == ("", "")
    assert [(u.name, u.email) for u in repo.list_users()] == [("Ana", "ana@mail.com")]


def test_edit_mode_submit_updates_pinned_record(repo, ctrl, ready):
    state = _submit(ctrl, ready, "Ana", "ana@mail.com")
    state = _submit(ctrl, state, "Bia", "bia@mail.com")
    ana = state.users[0]
    state = user_form.select_for_edit(state, ana)
    state = _submit(ctrl, state, "Ana Silva", "ana@mail.com")
    assert state.is_editing is False
    assert [(u.id, u.name) for u in state.users] == [(ana.id, "Ana Silva"), (state.users[1].id, "Bia")]


def test_delete_requires_confirmation(repo, ctrl, ready):
    state = _submit(ctrl, ready, "Ana", "ana@mail.com")
    user_id = state.users[0].id
    asked = user_form.request_delete(state, user_id)
    assert asked.pending_delete == user_id
    assert len(repo.list_users()) == 1

    kept = user_form.cancel_delete(asked)
    assert kept.pending_delete is None
    assert len(repo.list_users()) == 1

    gone = ctrl.confirm_delete(asked)
    assert gone.pending_delete is None
    assert gone.users == ()


def test_deleting_record_under_edit_resets_form(ctrl, ready):
    state = _submit(ctrl, ready, "Ana", "ana@mail.com")
    state = _submit(ctrl, state, "Bia", "bia@mail.com")
    ana, bia = state.users

    editing_bia = user_form.select_for_edit(state, bia)
    state = ctrl.confirm_delete(user_form.request_delete(editing_bia, ana.id))
    assert state.editing_id == bia.id

    state = ctrl.confirm_delete(user_form.request_delete(state, bia.id))
    assert state.is_editing is False
    assert (state.name, state.email) == ("", "")


def test_confirm_without_pending_delete_is_noop(repo, ctrl, ready):
    state = _submit(ctrl, ready, "Ana", "ana@mail.com")
    assert ctrl.confirm_delete(state).users == state.users


def test_end_to_end_flow(repo, ctrl, ready):
    state = _submit(ctrl, ready, "Ana", "ana@mail.com")
    assert len(state.users) == 1
    user_id = state.users[0].id

    state = user_form.select_for_edit(state, state.users[0])
    state = _submit(ctrl, state, "Ana Silva", "ana@mail.com")
    assert [(u.id, u.name, u.email) for u in state.users] == [(user_id, "Ana Silva", "ana@mail.com")]

    state = ctrl.confirm_delete(user_form.request_delete(state, user_id))
    assert state.users == ()
    assert repo.list_users() == []


@pytest.mark.parametrize("name,email", [("", "x@y.com"), ("Ana", "a@b"), ("Ana Silva", "")])
def test_invalid_submit_in_edit_mode_keeps_pinned_record(repo, ctrl, ready, name, email):
    state = _submit(ctrl, ready, "Ana", "ana@mail.com")
    ana = state.users[0]
    editing = user_form.select_for_edit(state, ana)

    state = _submit(ctrl, editing, name, email)
    assert state.notice is not None
    assert state.editing_id == ana.id
    assert repo.get_user(ana.id) == ana
    assert repo.list_users() == [ana]
    assert state.users == (ana,)


def test_repeated_invalid_submits_in_edit_mode(repo, ctrl, ready):
    state = _submit(ctrl, ready, "Ana", "ana@mail.com")
    ana = state.users[0]
    state = user_form.select_for_edit(state, ana)

    state = _submit(ctrl, state, "", "x@y.com")
    assert state.notice.title == "Atenção"
    state = _submit(ctrl, user_form.dismiss_notice(state), "Ana", "a@b")
    assert state.notice.title == "E-mail Inválido"
    assert state.editing_id == ana.id
    assert state.submit_label == "Salvar Alterações"
    assert repo.get_user(ana.id) == ana
