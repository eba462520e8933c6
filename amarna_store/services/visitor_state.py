"""每位訪客的暫存狀態（購物車與聊天紀錄），僅存在於記憶體中。"""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from ..common.services.gemini_service import CHAT_GREETING
from .cart_store import CartStore

MAX_STORED_TURNS = 50
MAX_VISITORS = 10000
VISITOR_IDLE_SECONDS = 6 * 3600


def _greeting() -> List[Dict[str, str]]:
    return [{"sender": "bot", "text": CHAT_GREETING}]


@dataclass
class VisitorState:
    cart: CartStore = field(default_factory=CartStore)
    chat_history: List[Dict[str, str]] = field(default_factory=_greeting)

    def append_turn(self, sender: str, text: str) -> None:
        self.chat_history.append({"sender": sender, "text": text})
        del self.chat_history[:-MAX_STORED_TURNS]

    def reset_chat(self) -> None:
        self.chat_history = _greeting()


class VisitorRegistry:
    """Maps the visitor id stored in the Flask session to its state.

    Bounded: visitors idle longer than ``idle_seconds`` are dropped, and past
    ``max_visitors`` the least recently seen visitor is evicted.
    """

    def __init__(
        self,
        max_visitors: int = MAX_VISITORS,
        idle_seconds: float = VISITOR_IDLE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._states: "OrderedDict[str, Tuple[float, VisitorState]]" = OrderedDict()
        self._lock = threading.Lock()
        self._max_visitors = max_visitors
        self._idle_seconds = idle_seconds
        self._clock = clock

    def __len__(self) -> int:
        with self._lock:
            return len(self._states)

    def find(self, visitor_id: Optional[str]) -> Optional[VisitorState]:
        """Existing state for ``visitor_id``, without creating one."""

        if not visitor_id:
            return None
        with self._lock:
            now = self._clock()
            self._expire(now)
            entry = self._states.get(visitor_id)
            if entry is None:
                return None
            self._touch(visitor_id, entry[1], now)
            return entry[1]

    def get(self, visitor_id: str) -> VisitorState:
        with self._lock:
            now = self._clock()
            self._expire(now)
            entry = self._states.get(visitor_id)
            state = entry[1] if entry else VisitorState()
            self._touch(visitor_id, state, now)
            while len(self._states) > self._max_visitors:
                self._states.popitem(last=False)
            return state

    def _touch(self, visitor_id: str, state: VisitorState, now: float) -> None:
        self._states[visitor_id] = (now, state)
        self._states.move_to_end(visitor_id)

    def _expire(self, now: float) -> None:
        # oldest first, so stop at the first visitor still inside the window
        while self._states:
            oldest_id, (seen, _) = next(iter(self._states.items()))
            if now - seen <= self._idle_seconds:
                break
            del self._states[oldest_id]
