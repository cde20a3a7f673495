"""
Shared fixtures and in-process fakes for the hosted services.
"""

import asyncio
import os
import sys
from types import SimpleNamespace
from typing import Dict, List, Optional

import pytest

# Add project root to path
project_root = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
sys.path.insert(0, os.path.join(project_root, "career_advisor", "src"))

from supabase import AuthApiError

from career_advisor.auth_store import SessionStateHolder
from career_advisor.background import TaskTracker
from career_advisor.career_ai import CareerAI
from career_advisor.config import AdvisorSettings
from career_advisor.repository import CareerRepository, PersistenceError
from career_advisor.session_state import Identity


class FakeLLMClient:
    """Stands in for AsyncOpenAI; records every chat-completions request."""

    def __init__(self, content: Optional[str] = "## Career Recommendations\n- Data Scientist", error: Exception = None):
        self.content = content
        self.error = error
        self.requests: List[Dict] = []
        self.chat = SimpleNamespace(completions=self)

    async def create(self, **kwargs):
        self.requests.append(kwargs)
        if self.error:
            raise self.error
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=self.content))])


class BlockingLLMClient(FakeLLMClient):
    """Holds every completion until ``release`` is set."""

    def __init__(self, content: Optional[str] = "Consider product management."):
        super().__init__(content=content)
        self.release = asyncio.Event()

    async def create(self, **kwargs):
        await self.release.wait()
        return await super().create(**kwargs)


class FakeAuthProvider:
    """Auth provider with an in-memory account table and change listeners."""

    def __init__(self, accounts: Optional[Dict[str, str]] = None, current: Optional[Identity] = None):
        self.accounts = dict(accounts or {})
        self.sign_out_error: Optional[Exception] = None
        self.sign_out_calls = 0
        self._identity = current
        self._listeners = []

    def _emit(self, identity: Optional[Identity]):
        self._identity = identity
        for listener in list(self._listeners):
            listener(identity)

    def sign_in(self, email: str, password: str) -> Identity:
        if self.accounts.get(email) != password:
            raise AuthApiError("Invalid login credentials", 400, "invalid_credentials")
        identity = Identity(id=f"user-{email}", email=email)
        self._emit(identity)
        return identity

    def sign_up(self, email: str, password: str) -> Identity:
        if email in self.accounts:
            raise AuthApiError("User already registered", 422, "user_already_exists")
        self.accounts[email] = password
        identity = Identity(id=f"user-{email}", email=email)
        self._emit(identity)
        return identity

    def sign_out(self):
        self.sign_out_calls += 1
        if self.sign_out_error:
            raise self.sign_out_error
        self._emit(None)

    def current_identity(self) -> Optional[Identity]:
        return self._identity

    def subscribe(self, listener):
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)


class FlakyRepository(CareerRepository):
    """In-memory repository whose named operations fail."""

    def __init__(self, failing=()):
        super().__init__()
        self.failing = set(failing)

    def _check(self, operation: str):
        if operation in self.failing:
            raise PersistenceError(f"{operation} unavailable")

    async def get_profile(self, user_id):
        self._check("get_profile")
        return await super().get_profile(user_id)

    async def create_profile(self, identity):
        self._check("create_profile")
        return await super().create_profile(identity)

    async def save_quiz_result(self, user_id, responses):
        self._check("save_quiz_result")
        return await super().save_quiz_result(user_id, responses)

    async def save_chat_message(self, user_id, message, sender):
        self._check("save_chat_message")
        return await super().save_chat_message(user_id, message, sender)


@pytest.fixture
def settings():
    return AdvisorSettings(together_api_key="test-key")


@pytest.fixture
def llm():
    return FakeLLMClient()


@pytest.fixture
def ai(settings, llm):
    return CareerAI(settings, llm_client=llm)


@pytest.fixture
def repository():
    return CareerRepository()


@pytest.fixture
def tasks():
    return TaskTracker()


@pytest.fixture
def provider():
    return FakeAuthProvider(accounts={"ada@example.com": "correct-horse"})


@pytest.fixture
def holder(provider, repository, tasks):
    return SessionStateHolder(provider, repository, tasks)


@pytest.fixture
def ada():
    return Identity(id="user-ada@example.com", email="ada@example.com")
