"""Tests for SessionTable."""

import pytest

from shellrelay.domain import (
    DuplicateSessionError,
    SessionId,
    SessionState,
    SessionTable,
    ShellFailure,
)

from ..conftest import FakeShellFactory, settle


@pytest.fixture
def table(shell_factory, listener):
    return SessionTable(shell_factory, listener)


class TestSessionTableCreation:
    """Tests for session creation and lookup."""

    async def test_create_inserts_pending_session(self, table, credentials):
        session = table.create_session(SessionId("s1"), credentials)

        assert session.state is SessionState.PENDING
        assert table.lookup(SessionId("s1")) is session
        assert len(table) == 1
        await settle()

    async def test_duplicate_rejected_without_mutation(self, table, shell_factory, credentials):
        """Test a duplicate id raises and leaves the first session untouched."""
        first = table.create_session(SessionId("s1"), credentials)
        await settle()

        with pytest.raises(DuplicateSessionError, match="Duplicate session ID."):
            table.create_session(SessionId("s1"), credentials)

        assert table.lookup(SessionId("s1")) is first
        assert first.state is SessionState.CONNECTED
        assert len(shell_factory.shells) == 1

    async def test_lookup_miss_returns_none(self, table):
        assert table.lookup(SessionId("missing")) is None

    async def test_iteration_yields_ids(self, table, credentials):
        table.create_session(SessionId("a"), credentials)
        table.create_session(SessionId("b"), credentials)

        assert set(table) == {SessionId("a"), SessionId("b")}
        assert SessionId("a") in table
        await settle()


class TestSessionTableTeardown:
    """Tests for removal on terminal transitions and explicit teardown."""

    async def test_failed_session_removed(self, listener, credentials):
        factory = FakeShellFactory(open_failure=ShellFailure("Permission denied", code="AUTH"))
        table = SessionTable(factory, listener)

        table.create_session(SessionId("s1"), credentials)
        await settle()

        assert table.lookup(SessionId("s1")) is None
        assert listener.kinds() == ["failed"]

    async def test_remote_closed_session_removed(self, table, shell_factory, listener, credentials):
        table.create_session(SessionId("s1"), credentials)
        await settle()

        shell_factory.last.remote_close()

        assert SessionId("s1") not in table
        assert listener.kinds() == ["connected", "closed"]

    async def test_removed_before_listener_notified(self, shell_factory, credentials):
        """Test the table is already updated when the notification arrives."""
        seen = []

        class Probe:
            def session_connected(self, session):
                pass

            def session_data(self, session, text):
                pass

            def session_failed(self, session, failure):
                pass

            def session_closed(self, session):
                seen.append(session.id in table)

        table = SessionTable(shell_factory, Probe())
        table.create_session(SessionId("s1"), credentials)
        await settle()

        shell_factory.last.remote_close()

        assert seen == [False]

    async def test_remove_and_close(self, table, shell_factory, listener, credentials):
        table.create_session(SessionId("s1"), credentials)
        await settle()

        removed = table.remove_and_close(SessionId("s1"))

        assert removed is not None
        assert removed.state is SessionState.CLOSED
        assert shell_factory.last.closed is True
        assert len(table) == 0
        assert listener.kinds() == ["connected"]

    async def test_remove_and_close_miss_is_noop(self, table):
        assert table.remove_and_close(SessionId("nope")) is None

    async def test_close_all(self, table, shell_factory, listener, credentials):
        """Test close_all closes every session exactly once, silently."""
        table.create_session(SessionId("s1"), credentials)
        table.create_session(SessionId("s2"), credentials)
        await settle()

        closed = table.close_all()

        assert closed == 2
        assert len(table) == 0
        assert all(shell.close_calls == 1 for shell in shell_factory.shells)
        assert "closed" not in listener.kinds()

    async def test_close_all_swallows_teardown_errors(self, table, shell_factory, credentials):
        table.create_session(SessionId("s1"), credentials)
        table.create_session(SessionId("s2"), credentials)
        await settle()

        def explode():
            raise RuntimeError("already gone")

        shell_factory.shells[0].close = explode

        assert table.close_all() == 2
        assert shell_factory.shells[1].closed is True

    async def test_id_reusable_after_failure(self, listener, credentials):
        """Test a failed id can be created again on the same table."""
        factory = FakeShellFactory(open_failure=ShellFailure("refused", code="ECONNREFUSED"))
        table = SessionTable(factory, listener)
        table.create_session(SessionId("s1"), credentials)
        await settle()

        factory.defaults = {}
        session = table.create_session(SessionId("s1"), credentials)
        await settle()

        assert table.lookup(SessionId("s1")) is session
        assert session.state is SessionState.CONNECTED
