"""Play Session Cache - Sessoes de jogo em memoria com TTL.

Sessoes de jogo nunca sao persistidas: abandonar o link (ou reiniciar o
servidor) descarta a sessao.
"""

import asyncio
from collections import OrderedDict
from time import monotonic
from typing import NamedTuple

from ..engine.play_engine import QuizPlayer


class _Slot(NamedTuple):
    player: QuizPlayer
    idle_ttl: float
    deadline: float


class PlaySessionCache:
    """Sessoes abertas por play_id.

    Cada acesso renova o prazo da sessao (TTL de inatividade). Ao atingir
    ``max_size`` a sessao usada ha mais tempo e descartada.
    """

    def __init__(self, max_size: int = 10_000, default_ttl: float = 3600):
        self._slots: OrderedDict[str, _Slot] = OrderedDict()
        self._max_size = max_size
        self._default_ttl = default_ttl
        self._expired = 0
        self._evicted = 0
        self._lock = asyncio.Lock()

    async def get(self, play_id: str) -> QuizPlayer | None:
        """Sessao aberta ou None se inexistente/expirada."""
        now = monotonic()
        async with self._lock:
            slot = self._slots.get(play_id)
            if slot is None:
                return None
            if now > slot.deadline:
                del self._slots[play_id]
                self._expired += 1
                return None

            self._slots[play_id] = slot._replace(deadline=now + slot.idle_ttl)
            self._slots.move_to_end(play_id)
            return slot.player

    async def put(self, player: QuizPlayer, ttl: float | None = None) -> None:
        idle_ttl = ttl or self._default_ttl
        async with self._lock:
            while len(self._slots) >= self._max_size:
                self._slots.popitem(last=False)
                self._evicted += 1
            self._slots[player.session.play_id] = _Slot(
                player, idle_ttl, monotonic() + idle_ttl
            )

    async def purge_quiz(self, quiz_id: str) -> int:
        """Descarta sessões de um quiz removido."""
        async with self._lock:
            stale = [pid for pid, slot in self._slots.items() if slot.player.definition.id == quiz_id]
            for play_id in stale:
                del self._slots[play_id]
            return len(stale)

    async def clear(self) -> None:
        async with self._lock:
            self._slots.clear()

    def __len__(self) -> int:
        return len(self._slots)

    def get_stats(self) -> dict:
        return {
            "size": len(self._slots),
            "max_size": self._max_size,
            "expired": self._expired,
            "evicted": self._evicted,
        }
