"""
Pytest configuration and fixtures for Sleepcord tests.
"""

import sys
from pathlib import Path

import pytest

# Add src directory to path so imports work
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))


class FakeMember:
    """Guild member whose voice disconnect either succeeds or raises ``error``."""

    def __init__(self, display_name: str, error: Exception | None = None) -> None:
        self.display_name = display_name
        self.error = error


class FakeGateway:
    """In-memory gateway: a fixed guild cache and a fixed member list."""

    def __init__(self, guild_ids=(1,), members=(), list_error: Exception | None = None) -> None:
        self.guilds = {guild_id: object() for guild_id in guild_ids}
        self.members = list(members)
        self.list_error = list_error
        self.attempted: list[str] = []
        self.disconnected: list[str] = []
        self.sent: list[tuple[int, str]] = []

    def resolve_guild(self, guild_id):
        return self.guilds.get(guild_id)

    async def list_members(self, guild):
        if self.list_error is not None:
            raise self.list_error
        return list(self.members)

    async def disconnect_member(self, member):
        self.attempted.append(member.display_name)
        if member.error is not None:
            raise member.error
        self.disconnected.append(member.display_name)

    async def send_message(self, channel_id, text):
        self.sent.append((channel_id, text))


class FakeEnvironment:
    """Environment that records sent messages and logged errors."""

    def __init__(self, gateway: FakeGateway, guild_id: int = 1, channel_id: int = 10) -> None:
        self.gateway = gateway
        self.guild_id = guild_id
        self.channel_id = channel_id
        self.sent: list[str] = []
        self.errors: list[tuple[str, BaseException | None]] = []
        self.fail_sends = False

    async def send_message(self, text):
        if self.fail_sends:
            raise RuntimeError("Missing Permissions")
        self.sent.append(text)

    def log_error(self, message, exc=None):
        self.errors.append((message, exc))


@pytest.fixture()
def fake_gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture()
def fake_env(fake_gateway: FakeGateway) -> FakeEnvironment:
    return FakeEnvironment(fake_gateway)


@pytest.fixture()
def member_factory():
    return FakeMember


@pytest.fixture()
def gateway_factory():
    return FakeGateway


@pytest.fixture()
def recorded_events():
    """An event sink paired with the list it appends to."""
    events: list = []

    async def sink(event) -> None:
        events.append(event)

    return events, sink
