"""Shared test fixtures."""
from __future__ import annotations

import asyncio
import dataclasses
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

import pytest

from portal_messaging.application.dto.message import SendMessageDTO
from portal_messaging.application.dto.principal import Principal
from portal_messaging.application.exceptions import BackendError
from portal_messaging.domain.entities.contact import Contact
from portal_messaging.domain.entities.message import Message
from portal_messaging.domain.entities.pregnancy import Pregnancy
from portal_messaging.domain.value_objects.enums import UserRole

PATIENT_ID = 42
CLINICIAN_ID = 101
MIDWIFE_ID = 102
PREGNANCY_ID = 7

_BASE_TS = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def patient_principal() -> Principal:
    return Principal(user_id=PATIENT_ID, role=UserRole.PATIENT, username="sarah")


@pytest.fixture
def clinician_principal() -> Principal:
    return Principal(user_id=CLINICIAN_ID, role=UserRole.CLINICIAN, username="dr.emily")


def make_contact(
    contact_id: int,
    *,
    role: UserRole = UserRole.CLINICIAN,
    first_name: str = "Emily",
    last_name: str = "Chen",
) -> Contact:
    return Contact(
        id=contact_id,
        username=f"{first_name.lower()}.{contact_id}",
        first_name=first_name,
        last_name=last_name,
        role=role,
    )


def make_message(
    message_id: int,
    *,
    from_user_id: int = CLINICIAN_ID,
    to_user_id: int = PATIENT_ID,
    pregnancy_id: int = PREGNANCY_ID,
    body: str = "hello",
    read: bool = False,
) -> Message:
    return Message(
        id=message_id,
        pregnancy_id=pregnancy_id,
        from_user_id=from_user_id,
        to_user_id=to_user_id,
        body=body,
        timestamp=_BASE_TS + timedelta(minutes=message_id),
        read=read,
    )


async def settle(rounds: int = 10) -> None:
    """Let scheduled tasks run up to their next real suspension point."""
    for _ in range(rounds):
        await asyncio.sleep(0)


async def eventually(predicate: Callable[[], bool], timeout: float = 1.0) -> None:
    async def _wait() -> None:
        while not predicate():
            await asyncio.sleep(0.005)

    await asyncio.wait_for(_wait(), timeout)


@dataclass
class FakeContactReader:
    contacts: list[Contact] = field(default_factory=list)
    fail: bool = False
    calls: list[UserRole] = field(default_factory=list)

    async def list_by_role(self, role: UserRole) -> list[Contact]:
        self.calls.append(role)
        if self.fail:
            raise BackendError("500: Error fetching users", status_code=500)
        return list(self.contacts)


@dataclass
class FakePregnancyReader:
    # keyed by patient id; None is a patient's own lookup
    pregnancies: dict[int | None, Pregnancy] = field(default_factory=dict)
    gates: dict[int | None, asyncio.Event] = field(default_factory=dict)
    fail: bool = False
    calls: list[int | None] = field(default_factory=list)

    async def get_current(self, patient_id: int | None = None) -> Pregnancy | None:
        self.calls.append(patient_id)
        gate = self.gates.get(patient_id)
        if gate is not None:
            await gate.wait()
        if self.fail:
            raise BackendError("500: Error fetching pregnancy record", status_code=500)
        return self.pregnancies.get(patient_id)


@dataclass
class FakeMessageReader:
    # keyed by (pregnancy_id, other_user_id) as seen by the signed-in user
    threads: dict[tuple[int, int], list[Message]] = field(default_factory=dict)
    gates: dict[tuple[int, int], asyncio.Event] = field(default_factory=dict)
    fail: bool = False
    calls: list[tuple[int, int]] = field(default_factory=list)
    in_flight: int = 0
    max_in_flight: int = 0

    async def list_between(self, pregnancy_id: int, other_user_id: int) -> list[Message]:
        key = (pregnancy_id, other_user_id)
        self.calls.append(key)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            gate = self.gates.get(key)
            if gate is not None:
                await gate.wait()
            if self.fail:
                raise BackendError("500: Error fetching messages", status_code=500)
            return list(self.threads.get(key, []))
        finally:
            self.in_flight -= 1


@dataclass
class FakeMessageWriter:
    _reader: FakeMessageReader
    user_id: int = PATIENT_ID
    created: list[SendMessageDTO] = field(default_factory=list)
    read_calls: list[int] = field(default_factory=list)
    fail_create: bool = False
    fail_read: bool = False
    read_error: Exception | None = None
    create_gate: asyncio.Event | None = None
    read_gate: asyncio.Event | None = None
    _next_id: int = 1000

    async def create(self, dto: SendMessageDTO) -> Message:
        self.created.append(dto)
        if self.create_gate is not None:
            await self.create_gate.wait()
        if self.fail_create:
            raise BackendError("500: Error creating message", status_code=500)
        self._next_id += 1
        message = make_message(
            self._next_id,
            from_user_id=self.user_id,
            to_user_id=dto.to_user_id,
            pregnancy_id=dto.pregnancy_id,
            body=dto.body,
        )
        self._reader.threads.setdefault((dto.pregnancy_id, dto.to_user_id), []).append(message)
        return message

    async def mark_read(self, message_id: int) -> None:
        self.read_calls.append(message_id)
        if self.read_gate is not None:
            await self.read_gate.wait()
        if self.read_error is not None:
            raise self.read_error
        if self.fail_read:
            raise BackendError("500: Failed to mark message as read", status_code=500)
        for thread in self._reader.threads.values():
            for i, message in enumerate(thread):
                if message.id == message_id:
                    thread[i] = dataclasses.replace(message, read=True)


@dataclass
class FakeBackend:
    """In-memory portal backend for unit tests."""
    contacts: FakeContactReader = field(default_factory=FakeContactReader)
    pregnancies: FakePregnancyReader = field(default_factory=FakePregnancyReader)
    messages: FakeMessageReader = field(default_factory=FakeMessageReader)
    messages_w: FakeMessageWriter | None = None
    user_id: int = PATIENT_ID
    closed: bool = False
    tokens: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.messages_w is None:
            self.messages_w = FakeMessageWriter(self.messages, user_id=self.user_id)

    def set_token(self, token: str) -> None:
        self.tokens.append(token)

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def patient_backend() -> FakeBackend:
    """Patient 42 with two clinicians and one pregnancy."""
    backend = FakeBackend()
    backend.contacts.contacts = [
        make_contact(CLINICIAN_ID),
        make_contact(MIDWIFE_ID, first_name="Jane", last_name="Smith"),
    ]
    backend.pregnancies.pregnancies[None] = Pregnancy(id=PREGNANCY_ID, patient_id=PATIENT_ID)
    return backend
