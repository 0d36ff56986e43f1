"""
Session state and storage.

A Session holds everything remembered about one conversation. Stores are
injected into the engine; the default keeps sessions in process memory only.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import OrderedDict, deque
from dataclasses import dataclass, field
from typing import Deque, Optional

HISTORY_LIMIT = 30


@dataclass
class LeadDraft:
    """Lead fields collected so far by the B2B dialogue."""

    business_type: str = ""
    country: str = ""
    products: str = ""
    volume: str = ""
    name: str = ""
    company: str = ""
    email: str = ""
    web: str = ""


@dataclass
class Session:
    asked_once: bool = False
    last_goal: Optional[str] = None
    preferred_format: Optional[str] = None
    last_intent: Optional[str] = None
    history: Deque[str] = field(default_factory=lambda: deque(maxlen=HISTORY_LIMIT))
    is_b2b: bool = False
    b2b_step: int = 0
    lead: LeadDraft = field(default_factory=LeadDraft)

    def remember(self, message: str) -> None:
        """Append a raw message to the rolling log (oldest dropped first)."""
        self.history.append(message)

    def reset_b2b(self) -> None:
        self.is_b2b = False
        self.b2b_step = 0
        self.lead = LeadDraft()


class SessionStore(ABC):
    """Storage interface for conversation sessions."""

    @abstractmethod
    def get(self, key: str) -> Optional[Session]:
        ...

    @abstractmethod
    def put(self, key: str, session: Session) -> None:
        ...

    @abstractmethod
    def evict(self, key: str) -> None:
        ...

    @abstractmethod
    def __len__(self) -> int:
        ...

    def get_or_create(self, key: str) -> Session:
        session = self.get(key)
        if session is None:
            session = Session()
            self.put(key, session)
        return session


class InMemorySessionStore(SessionStore):
    """
    Process-local session map.

    Unbounded unless max_sessions is set, in which case the least recently
    used session is dropped first. No locking: concurrent writes to the
    same key are last-write-wins.
    """

    def __init__(self, max_sessions: Optional[int] = None) -> None:
        self._max_sessions = max_sessions if max_sessions and max_sessions > 0 else None
        self._sessions: OrderedDict[str, Session] = OrderedDict()

    def get(self, key: str) -> Optional[Session]:
        session = self._sessions.get(key)
        if session is not None:
            self._sessions.move_to_end(key)
        return session

    def put(self, key: str, session: Session) -> None:
        self._sessions[key] = session
        self._sessions.move_to_end(key)
        if self._max_sessions is not None:
            while len(self._sessions) > self._max_sessions:
                self._sessions.popitem(last=False)

    def evict(self, key: str) -> None:
        self._sessions.pop(key, None)

    def __len__(self) -> int:
        return len(self._sessions)
