from __future__ import annotations

from portal_messaging.domain.entities.conversation import ConversationKey
from portal_messaging.services.message_store import MessageStore
from tests.conftest import (
    CLINICIAN_ID,
    MIDWIFE_ID,
    PATIENT_ID,
    PREGNANCY_ID,
    make_message,
)

KEY = ConversationKey(PREGNANCY_ID, CLINICIAN_ID)


def _thread():
    return [
        make_message(1),
        make_message(2, from_user_id=PATIENT_ID, to_user_id=CLINICIAN_ID),
        make_message(3),
    ]


def test_reconcile_replaces_content_in_backend_order():
    store = MessageStore(PATIENT_ID)
    snapshot = [make_message(3), make_message(1), make_message(2)]

    assert store.reconcile(KEY, snapshot) is True

    assert [m.id for m in store.messages] == [3, 1, 2]
    assert store.key == KEY


def test_identical_snapshot_is_idempotent():
    store = MessageStore(PATIENT_ID)
    store.reconcile(KEY, _thread())
    version = store.version
    before = store.messages

    for _ in range(3):
        assert store.reconcile(KEY, _thread()) is False

    assert store.version == version
    assert store.messages == before
    assert len(store) == 3


def test_reconcile_is_full_replace_not_merge():
    store = MessageStore(PATIENT_ID)
    store.reconcile(KEY, _thread())

    store.reconcile(KEY, [make_message(3)])

    assert [m.id for m in store.messages] == [3]


def test_read_flag_change_counts_as_change():
    store = MessageStore(PATIENT_ID)
    store.reconcile(KEY, [make_message(1)])

    assert store.reconcile(KEY, [make_message(1, read=True)]) is True
    assert store.messages[0].read is True


def test_reconcile_without_key_leaves_empty_store():
    store = MessageStore(PATIENT_ID)
    store.reconcile(KEY, _thread())

    store.reconcile(None, _thread())

    assert store.messages == ()
    assert store.key is None


def test_drops_messages_outside_the_conversation():
    store = MessageStore(PATIENT_ID)
    snapshot = [
        make_message(1),
        make_message(2, pregnancy_id=PREGNANCY_ID + 1),
        make_message(3, from_user_id=MIDWIFE_ID),
        make_message(4, from_user_id=CLINICIAN_ID, to_user_id=MIDWIFE_ID),
        make_message(5, from_user_id=PATIENT_ID, to_user_id=PATIENT_ID),
    ]

    store.reconcile(KEY, snapshot)

    assert [m.id for m in store.messages] == [1]


def test_unread_inbound_ignores_own_and_read_messages():
    store = MessageStore(PATIENT_ID)
    store.reconcile(KEY, [
        make_message(1, read=True),
        make_message(2, from_user_id=PATIENT_ID, to_user_id=CLINICIAN_ID),
        make_message(3),
    ])

    assert [m.id for m in store.unread_inbound()] == [3]


def test_clear_on_empty_store_reports_no_change():
    store = MessageStore(PATIENT_ID)

    assert store.clear() is False
    store.reconcile(KEY, [make_message(1)])
    assert store.clear() is True
