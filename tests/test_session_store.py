import pytest

from architect.errors import EmptyLog, InvalidInput, RequestInFlight
from architect.session_store import SessionStore, new_session_id
from architect.states import Role

from conftest import RETRIED_PAYLOAD, make_result


def test_session_id_is_stable_and_unique():
    store = SessionStore()
    assert store.session_id.startswith("session_")
    assert store.session_id == store.session_id
    assert new_session_id() != new_session_id()
    assert SessionStore("session_fixed").session_id == "session_fixed"


@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_blank_prompt_rejected(text):
    store = SessionStore()
    with pytest.raises(InvalidInput):
        store.append_user_turn(text)
    assert len(store) == 0
    assert not store.pending


def test_second_user_turn_while_pending_rejected():
    store = SessionStore()
    store.append_user_turn("A login card")
    with pytest.raises(RequestInFlight):
        store.append_user_turn("Another")
    assert len(store) == 1


def test_assistant_turn_materializes_latest(login_result):
    store = SessionStore()
    assert store.latest_assistant_result() is None

    store.append_user_turn("A login card")
    store.append_assistant_turn(login_result, prompt="A login card")

    assert not store.pending
    assert store.latest_assistant_result() is login_result
    assert [t.role for t in store.turns] == [Role.USER, Role.ASSISTANT]
    assert store.turns[1].prompt == "A login card"


def test_rollback_removes_user_turn_and_clears_pending(login_result):
    store = SessionStore()
    store.append_user_turn("first")
    store.append_assistant_turn(login_result)
    store.append_user_turn("second")

    removed = store.rollback_last_turn()

    assert removed.content == "second"
    assert len(store) == 2
    assert not store.pending
    assert store.latest_assistant_result() is login_result


def test_rollback_of_assistant_turn_restores_previous_result(login_result):
    later = make_result(RETRIED_PAYLOAD)
    store = SessionStore()
    store.append_user_turn("one")
    store.append_assistant_turn(login_result)
    store.append_user_turn("two")
    store.append_assistant_turn(later)

    store.rollback_last_turn()
    assert store.latest_assistant_result() is login_result

    store.rollback_last_turn()
    store.rollback_last_turn()
    assert store.latest_assistant_result() is None


def test_rollback_on_empty_log():
    with pytest.raises(EmptyLog):
        SessionStore().rollback_last_turn()


def test_turns_snapshot_is_read_only(login_result):
    store = SessionStore()
    store.append_user_turn("one")
    snapshot = store.turns
    assert isinstance(snapshot, tuple)
    store.append_assistant_turn(login_result)
    assert len(snapshot) == 1


def test_conversation_history(login_result):
    store = SessionStore()
    store.append_user_turn("A login card")
    store.append_assistant_turn(login_result)
    history = store.conversation_history()
    assert history[0] == {"role": "user", "content": "A login card"}
    assert history[1]["role"] == "assistant"
    assert "1 iteration(s)" in history[1]["content"]


def test_assistant_turn_requires_pending_prompt(login_result):
    store = SessionStore()
    with pytest.raises(InvalidInput):
        store.append_assistant_turn(login_result)

    store.append_user_turn("one")
    store.append_assistant_turn(login_result)
    with pytest.raises(InvalidInput):
        store.append_assistant_turn(login_result)

    assert [t.role for t in store.turns] == [Role.USER, Role.ASSISTANT]


def test_rolling_back_result_reopens_its_prompt(login_result):
    store = SessionStore()
    store.append_user_turn("a")
    store.append_assistant_turn(login_result)

    store.rollback_last_turn()

    assert store.pending
    with pytest.raises(RequestInFlight):
        store.append_user_turn("b")
    store.append_assistant_turn(login_result)
    assert [t.role for t in store.turns] == [Role.USER, Role.ASSISTANT]
