# climacare/client/cache.py
"""
Cache de consultas do cliente.

Entradas têm TTL: passado o prazo, a próxima leitura busca de novo.
Mutações seguem o padrão otimista: aplica localmente, confirma no servidor
e agenda uma releitura curta; se a confirmação falhar, volta o retrato
anterior e a exceção sobe.
"""
import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from climacare.domain.constants import CACHE_TTL_SECONDS, RECONCILE_DELAY_SECONDS

logger = logging.getLogger(__name__)

Scheduler = Callable[[float, Callable[[], None]], None]


def _timer_scheduler(delay: float, fn: Callable[[], None]) -> None:
    t = threading.Timer(delay, fn)
    t.daemon = True
    t.start()


@dataclass
class _Entry:
    value: Any
    fetched_at: Optional[float]


class QueryCache:
    def __init__(
        self,
        ttl: float = CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        scheduler: Scheduler = _timer_scheduler,
    ):
        self.ttl = ttl
        self.clock = clock
        self.scheduler = scheduler
        self._entries: Dict[str, _Entry] = {}
        self._lock = threading.RLock()

    def is_stale(self, key: str) -> bool:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or entry.fetched_at is None:
                return True
            return self.clock() - entry.fetched_at >= self.ttl

    def peek(self, key: str, default: Any = None) -> Any:
        with self._lock:
            entry = self._entries.get(key)
            return entry.value if entry is not None else default

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._entries[key] = _Entry(value, self.clock())

    def get(self, key: str, fetch: Callable[[], Any]) -> Any:
        if not self.is_stale(key):
            return self.peek(key)
        value = fetch()
        self.set(key, value)
        return value

    def invalidate(self, key: str, delay: float = 0) -> None:
        """Marca a chave como vencida agora ou após ``delay`` segundos."""
        if delay > 0:
            self.scheduler(delay, lambda: self.invalidate(key))
            return
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                entry.fetched_at = None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def optimistic_update(
        self,
        key: str,
        apply: Callable[[Any], Any],
        commit: Callable[[], Any],
        reconcile_delay: float = RECONCILE_DELAY_SECONDS,
    ) -> Any:
        with self._lock:
            previous = self._entries.get(key)
            if previous is not None:
                self._entries[key] = _Entry(apply(previous.value), previous.fetched_at)
        try:
            result = commit()
        except Exception:
            with self._lock:
                if previous is not None:
                    self._entries[key] = previous
                else:
                    self._entries.pop(key, None)
            logger.warning("optimistic update on %r rolled back", key)
            raise
        self.invalidate(key, delay=reconcile_delay)
        return result
