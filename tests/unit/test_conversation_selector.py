from __future__ import annotations

from portal_messaging.services.conversation_selector import ConversationSelector
from tests.conftest import CLINICIAN_ID, MIDWIFE_ID, make_contact


def test_ensure_default_picks_first_contact():
    selector = ConversationSelector()

    assert selector.ensure_default([make_contact(MIDWIFE_ID), make_contact(CLINICIAN_ID)]) is True
    assert selector.active_id == MIDWIFE_ID


def test_ensure_default_keeps_existing_selection():
    selector = ConversationSelector()
    selector.select(CLINICIAN_ID)

    assert selector.ensure_default([make_contact(MIDWIFE_ID)]) is False
    assert selector.active_id == CLINICIAN_ID


def test_ensure_default_with_no_contacts():
    selector = ConversationSelector()

    assert selector.ensure_default([]) is False
    assert selector.active_id is None


def test_reselecting_active_counterpart_is_noop():
    selector = ConversationSelector()

    assert selector.select(CLINICIAN_ID) is True
    assert selector.select(CLINICIAN_ID) is False
    assert selector.select(MIDWIFE_ID) is True
    assert selector.active_id == MIDWIFE_ID


def test_clear():
    selector = ConversationSelector()
    selector.select(CLINICIAN_ID)

    selector.clear()

    assert selector.active_id is None
