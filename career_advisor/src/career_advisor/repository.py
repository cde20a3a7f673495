"""
Career Data Repository

Persistence for profiles, quiz results and chat messages in Supabase.

Tables:
- profiles(id, email)
- quiz_results(user_id, answers)
- chat_messages(user_id, message, sender)

Only inserts and lookups are issued. Without a Supabase client the rows are
kept in memory, which is what local development and the tests use.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from career_advisor.session_state import Identity

logger = logging.getLogger(__name__)

PROFILES_TABLE = "profiles"
QUIZ_RESULTS_TABLE = "quiz_results"
CHAT_MESSAGES_TABLE = "chat_messages"


class PersistenceError(Exception):
    """A read or write against the data store failed."""


class CareerRepository:
    """
    Reads and writes the three tables of the app.

    Every failure is raised as PersistenceError. Callers decide whether to
    surface, log or swallow it.
    """

    def __init__(self, supabase_client=None):
        """
        Args:
            supabase_client: Supabase client instance (optional)
        """
        self.supabase = supabase_client
        self.use_supabase = supabase_client is not None
        self._tables: Dict[str, List[Dict[str, Any]]] = {
            PROFILES_TABLE: [],
            QUIZ_RESULTS_TABLE: [],
            CHAT_MESSAGES_TABLE: [],
        }

        if not self.use_supabase:
            logger.warning("⚠️ [CareerRepository] Supabase not available, using in-memory tables")

    def _insert(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        if not self.use_supabase:
            stored = dict(row, created_at=datetime.now().isoformat())
            self._tables[table].append(stored)
            return stored

        try:
            result = self.supabase.table(table).insert(row).execute()
        except Exception as e:
            raise PersistenceError(f"Insert into {table} failed: {e}") from e
        return result.data[0] if result.data else row

    def _select_eq(self, table: str, column: str, value: str, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        if not self.use_supabase:
            rows = [row for row in self._tables[table] if row.get(column) == value]
            return rows[:limit] if limit is not None else rows

        try:
            query = self.supabase.table(table).select('*').eq(column, value)
            if limit is not None:
                query = query.limit(limit)
            result = query.execute()
        except Exception as e:
            raise PersistenceError(f"Lookup in {table} failed: {e}") from e
        return result.data or []

    async def get_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Profile row for ``user_id`` or None when it does not exist."""
        rows = self._select_eq(PROFILES_TABLE, 'id', user_id, limit=1)
        return rows[0] if rows else None

    async def create_profile(self, identity: Identity) -> Dict[str, Any]:
        row = self._insert(PROFILES_TABLE, {"id": identity.id, "email": identity.email})
        logger.info(f"✅ [CareerRepository] Created profile for user {identity.id[:20]}")
        return row

    async def save_quiz_result(self, user_id: str, responses: Sequence) -> Dict[str, Any]:
        """Store the full ordered answer sequence of one completed quiz."""
        answers = [{"question": r.question, "answer": r.answer} for r in responses]
        row = self._insert(QUIZ_RESULTS_TABLE, {"user_id": user_id, "answers": answers})
        logger.info(f"💾 [CareerRepository] Saved quiz result ({len(answers)} answers)")
        return row

    async def list_quiz_results(self, user_id: str) -> List[Dict[str, Any]]:
        return self._select_eq(QUIZ_RESULTS_TABLE, 'user_id', user_id)

    async def save_chat_message(self, user_id: str, message: str, sender: str) -> Dict[str, Any]:
        return self._insert(CHAT_MESSAGES_TABLE, {
            "user_id": user_id,
            "message": message,
            "sender": sender,
        })
