"""
Unit Tests for the Session State Holder

Covers sign-in/sign-up/sign-out, provider-driven updates and the profile
bootstrap.
"""

import asyncio
import threading

import pytest
from supabase import AuthApiError

from career_advisor.auth_store import SessionStateHolder
from career_advisor.repository import PROFILES_TABLE

from conftest import FakeAuthProvider, FlakyRepository


class TestSessionStateHolder:
    """Test suite for SessionStateHolder."""

    def test_initial_state_is_loading_without_user(self, holder):
        assert holder.loading is True
        assert holder.user is None
        assert holder.state.authenticated is False

    @pytest.mark.asyncio
    async def test_bind_restores_existing_session(self, repository, tasks, ada):
        provider = FakeAuthProvider(current=ada)
        holder = SessionStateHolder(provider, repository, tasks)

        holder.bind_to_provider()
        await tasks.drain()

        assert holder.user == ada
        assert holder.loading is False
        profile = await repository.get_profile(ada.id)
        assert profile["email"] == ada.email

    @pytest.mark.asyncio
    async def test_bind_without_session_stops_loading(self, holder):
        holder.bind_to_provider()

        assert holder.loading is False
        assert holder.user is None

    @pytest.mark.asyncio
    async def test_sign_in_updates_state_through_notification(self, holder, tasks):
        holder.bind_to_provider()

        await holder.sign_in("ada@example.com", "correct-horse")
        await tasks.drain()

        assert holder.user.email == "ada@example.com"
        assert holder.state.authenticated is True

    @pytest.mark.asyncio
    async def test_sign_in_does_not_set_state_itself(self, holder):
        # Not bound: no notification reaches the holder
        await holder.sign_in("ada@example.com", "correct-horse")

        assert holder.user is None
        assert holder.loading is True

    @pytest.mark.asyncio
    async def test_sign_in_propagates_provider_error(self, holder):
        holder.bind_to_provider()

        with pytest.raises(AuthApiError) as excinfo:
            await holder.sign_in("ada@example.com", "wrong")

        assert excinfo.value.message == "Invalid login credentials"
        assert holder.user is None

    @pytest.mark.asyncio
    async def test_sign_up_creates_single_profile(self, holder, repository, tasks):
        holder.bind_to_provider()

        await holder.sign_up("grace@example.com", "hopper-1906")
        await tasks.drain()

        profiles = repository._tables[PROFILES_TABLE]
        assert [p["email"] for p in profiles] == ["grace@example.com"]
        assert holder.user.email == "grace@example.com"

    @pytest.mark.asyncio
    async def test_sign_up_survives_profile_failure(self, provider, tasks):
        repository = FlakyRepository(failing={"create_profile"})
        holder = SessionStateHolder(provider, repository, tasks)
        holder.bind_to_provider()

        await holder.sign_up("grace@example.com", "hopper-1906")
        await tasks.drain()

        assert holder.state.authenticated is True
        assert holder.user.email == "grace@example.com"
        assert repository._tables[PROFILES_TABLE] == []

    @pytest.mark.asyncio
    async def test_sign_up_propagates_provider_error(self, holder):
        with pytest.raises(AuthApiError):
            await holder.sign_up("ada@example.com", "anything")

    @pytest.mark.asyncio
    async def test_sign_out_clears_state(self, holder, provider, tasks):
        holder.bind_to_provider()
        await holder.sign_in("ada@example.com", "correct-horse")
        await tasks.drain()

        await holder.sign_out()

        assert holder.user is None
        assert provider.sign_out_calls == 1

    @pytest.mark.asyncio
    async def test_sign_out_clears_state_when_provider_fails(self, holder, provider, tasks):
        holder.bind_to_provider()
        await holder.sign_in("ada@example.com", "correct-horse")
        await tasks.drain()
        provider.sign_out_error = RuntimeError("network down")

        await holder.sign_out()

        assert holder.user is None
        assert holder.state.authenticated is False

    @pytest.mark.asyncio
    async def test_subscribers_see_every_change(self, holder, ada, tasks):
        seen = []
        unsubscribe = holder.subscribe(lambda state: seen.append(state.user))

        holder.set_user(ada)
        await holder.sign_out()
        unsubscribe()
        holder.set_user(ada)
        await tasks.drain()

        assert seen == [ada, None]

    @pytest.mark.asyncio
    async def test_existing_profile_is_not_recreated(self, holder, repository, tasks, ada):
        await repository.create_profile(ada)

        holder.set_user(ada)
        await tasks.drain()

        assert len(repository._tables[PROFILES_TABLE]) == 1

    @pytest.mark.asyncio
    async def test_profile_lookup_failure_is_swallowed(self, provider, tasks, ada):
        repository = FlakyRepository(failing={"get_profile"})
        holder = SessionStateHolder(provider, repository, tasks)

        holder.set_user(ada)
        await tasks.drain()

        assert holder.user == ada
        assert tasks.failures == []

    @pytest.mark.asyncio
    async def test_sign_out_before_restore_stops_loading(self, holder):
        await holder.sign_out()

        assert holder.loading is False
        assert holder.user is None

    @pytest.mark.asyncio
    async def test_change_from_timer_thread_is_applied_on_loop(self, holder, provider, repository, tasks, ada):
        holder.bind_to_provider()
        seen_threads = []
        holder.subscribe(lambda state: seen_threads.append(threading.get_ident()))

        # Token refreshes are reported from the client's own thread
        refresher = threading.Thread(target=provider._emit, args=(ada,))
        refresher.start()
        refresher.join()
        await asyncio.sleep(0)
        await tasks.drain()

        assert holder.user == ada
        assert seen_threads == [threading.get_ident()]
        assert tasks.failures == []
        profile = await repository.get_profile(ada.id)
        assert profile["email"] == ada.email

    def test_set_user_without_loop_is_logged_not_raised(self, holder, ada, tasks):
        holder.set_user(ada)

        assert holder.user == ada
        assert tasks.pending == 0
