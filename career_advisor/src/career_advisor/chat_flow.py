"""
Career Chat Flow

Append-only conversation with the career advisor. The conversation opens
with a greeting; each accepted send adds the user's message and then the
advisor's reply. Both are persisted in the background.
"""

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple

from career_advisor.auth_store import SessionStateHolder
from career_advisor.background import TaskTracker
from career_advisor.career_ai import CareerAI
from career_advisor.prompts import GREETING_MESSAGE
from career_advisor.repository import CareerRepository

logger = logging.getLogger(__name__)


class Sender(Enum):
    USER = "user"
    AI = "ai"


@dataclass(frozen=True)
class ChatMessage:
    id: str
    text: str
    sender: Sender
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "text": self.text,
            "sender": self.sender.value,
            "timestamp": self.timestamp.isoformat(),
        }


class ChatFlow:
    """Conversation of one workspace."""

    def __init__(
        self,
        ai: CareerAI,
        repository: CareerRepository,
        session: SessionStateHolder,
        tasks: TaskTracker,
    ):
        self.ai = ai
        self.repository = repository
        self.session = session
        self.tasks = tasks
        self.composing = False
        self._last_id = 0
        self._messages: List[ChatMessage] = [
            ChatMessage(id="greeting", text=GREETING_MESSAGE, sender=Sender.AI),
        ]

    @property
    def messages(self) -> Tuple[ChatMessage, ...]:
        return tuple(self._messages)

    def _next_id(self) -> str:
        # Millisecond clock, bumped when two messages land in the same tick
        self._last_id = max(int(time.time() * 1000), self._last_id + 1)
        return str(self._last_id)

    def _append(self, text: str, sender: Sender) -> ChatMessage:
        message = ChatMessage(id=self._next_id(), text=text, sender=sender)
        self._messages.append(message)
        return message

    def _persist(self, user_id: str, message: ChatMessage):
        self.tasks.spawn(
            self.repository.save_chat_message(user_id, message.text, message.sender.value),
            f"save-chat-message:{message.id}",
        )

    async def send(self, text: str) -> Optional[ChatMessage]:
        """
        Send ``text`` to the advisor.

        Ignored (returns None) when the text is blank, nobody is signed in or
        a reply is still being composed. Otherwise returns the reply message.
        """
        user = self.session.user
        if not text or not text.strip() or user is None or self.composing:
            return None

        user_message = self._append(text, Sender.USER)
        self.composing = True
        self._persist(user.id, user_message)

        try:
            reply = await self.ai.get_ai_response(text)
            ai_message = self._append(reply, Sender.AI)
            self._persist(user.id, ai_message)
            return ai_message
        except Exception as e:
            logger.error(f"❌ [ChatFlow] Error getting AI response: {e}")
            return None
        finally:
            self.composing = False

    def to_dict(self) -> dict:
        return {
            "messages": [m.to_dict() for m in self._messages],
            "composing": self.composing,
        }
