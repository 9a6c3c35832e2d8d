# luxematch/domain/services/session_svc.py

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Protocol
import asyncio
import itertools
import logging
import math
import time

from redis.asyncio import Redis

from luxematch.core.config import Settings
from luxematch.domain.errors import (
    EmptyQuery,
    RecommendationUnavailable,
    RequestInProgress,
    StaleRecommendation,
)
from luxematch.domain.models.outfit import AIRecommendation
from luxematch.domain.models.product import Catalog
from luxematch.domain.services.llm_clients import GenerationClient, provider_timeout_s
from luxematch.domain.services.pipeline_svc import resolve_outfit
from luxematch.utils.locks import RedisLock

logger = logging.getLogger(__name__)

# =============================================================================
#                               SESSION STORES
# =============================================================================

class SessionStore(Protocol):
    """
    Per-session busy flag, request tickets and the current recommendation.

    Tickets are unique across all sessions. A result may only be committed
    with the ticket that is still current for its session; anything else is
    a stale response and is dropped.
    """

    async def begin(self, session_id: str) -> int: ...
    async def commit(self, session_id: str, ticket: int, recommendation: AIRecommendation) -> None: ...
    async def finish(self, session_id: str, ticket: int) -> None: ...
    async def abandon(self, session_id: str) -> None: ...
    async def current(self, session_id: str) -> Optional[AIRecommendation]: ...


@dataclass
class _SessionState:
    ticket: int
    touched: float
    busy: bool = False
    current: Optional[AIRecommendation] = None


class InMemorySessionStore:
    """
    Single-process store. All mutations happen between awaits, so no lock is
    needed. Sessions untouched for `state_ttl` seconds are evicted, busy or not,
    matching the key expiry of the Redis store.
    """

    def __init__(self, *, state_ttl: float = 7200, clock: Callable[[], float] = time.monotonic):
        self._sessions: Dict[str, _SessionState] = {}
        self._tickets = itertools.count(1)
        self.state_ttl = state_ttl
        self._clock = clock

    def _expired(self, state: _SessionState, now: float) -> bool:
        return now - state.touched > self.state_ttl

    def _get(self, session_id: str) -> Optional[_SessionState]:
        state = self._sessions.get(session_id)
        if state is not None and self._expired(state, self._clock()):
            del self._sessions[session_id]
            return None
        return state

    def _prune(self) -> None:
        now = self._clock()
        for sid in [sid for sid, st in self._sessions.items() if self._expired(st, now)]:
            del self._sessions[sid]

    async def begin(self, session_id: str) -> int:
        self._prune()
        state = self._sessions.get(session_id)
        if state is not None and state.busy:
            raise RequestInProgress(session_id)
        ticket = next(self._tickets)
        # a new query clears the previous look
        self._sessions[session_id] = _SessionState(ticket=ticket, touched=self._clock(), busy=True)
        return ticket

    async def commit(self, session_id: str, ticket: int, recommendation: AIRecommendation) -> None:
        state = self._get(session_id)
        if state is None or state.ticket != ticket:
            raise StaleRecommendation(session_id, ticket)
        state.current = recommendation
        state.touched = self._clock()

    async def finish(self, session_id: str, ticket: int) -> None:
        state = self._get(session_id)
        if state is not None and state.ticket == ticket:
            state.busy = False
            state.touched = self._clock()

    async def abandon(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    async def current(self, session_id: str) -> Optional[AIRecommendation]:
        state = self._get(session_id)
        return state.current if state else None

    def __len__(self) -> int:
        return len(self._sessions)


class RedisSessionStore:
    """
    Multi-worker store:
      lock:session:<id>      busy flag, SET NX EX, value = ticket
      session:<id>:ticket    ticket allowed to commit
      session:<id>:current   current recommendation (JSON, short TTL)
    """

    TICKETS_KEY = "session:tickets"

    def __init__(self, redis: Redis, *, lock_ttl: int = 120, state_ttl: int = 7200):
        self.redis = redis
        self.lock_ttl = lock_ttl
        self.state_ttl = state_ttl

    def _lock(self, session_id: str) -> RedisLock:
        return RedisLock(self.redis, f"session:{session_id}", ttl=self.lock_ttl)

    @staticmethod
    def _ticket_key(session_id: str) -> str:
        return f"session:{session_id}:ticket"

    @staticmethod
    def _current_key(session_id: str) -> str:
        return f"session:{session_id}:current"

    async def begin(self, session_id: str) -> int:
        ticket = int(await self.redis.incr(self.TICKETS_KEY))
        if not await self._lock(session_id).acquire(token=str(ticket)):
            raise RequestInProgress(session_id)
        await self.redis.set(self._ticket_key(session_id), str(ticket), ex=self.state_ttl)
        await self.redis.delete(self._current_key(session_id))
        return ticket

    async def commit(self, session_id: str, ticket: int, recommendation: AIRecommendation) -> None:
        cur = await self.redis.get(self._ticket_key(session_id))
        if cur is None or str(cur) != str(ticket):
            raise StaleRecommendation(session_id, ticket)
        await self.redis.set(self._current_key(session_id), recommendation.model_dump_json(), ex=self.state_ttl)

    async def finish(self, session_id: str, ticket: int) -> None:
        await self._lock(session_id).release(token=str(ticket))

    async def abandon(self, session_id: str) -> None:
        await self.redis.delete(self._ticket_key(session_id), self._current_key(session_id))
        await self._lock(session_id).force_release()

    async def current(self, session_id: str) -> Optional[AIRecommendation]:
        raw = await self.redis.get(self._current_key(session_id))
        return AIRecommendation.model_validate_json(raw) if raw else None


# headroom between the end of the longest request and the busy flag lapsing
LOCK_TTL_MARGIN_S = 30

def session_lock_ttl(settings: Settings) -> int:
    """
    Busy-flag TTL that outlasts one request: the caller deadline when set,
    otherwise the provider call timeout (calls are never retried).
    """
    bound = settings.STYLIST_DEADLINE_S
    if bound is None:
        bound = provider_timeout_s(settings)
    return max(settings.session_lock_ttl, math.ceil(bound) + LOCK_TTL_MARGIN_S)


def build_session_store(settings: Settings, redis: Optional[Redis]) -> SessionStore:
    if redis is not None:
        lock_ttl = session_lock_ttl(settings)
        logger.info(f"Session store: redis lock_ttl={lock_ttl}s")
        return RedisSessionStore(redis, lock_ttl=lock_ttl, state_ttl=settings.session_state_ttl)
    logger.info("Session store: in-memory")
    return InMemorySessionStore(state_ttl=settings.session_state_ttl)

# =============================================================================
#                               STYLING SERVICE
# =============================================================================

class StylingService:
    """
    Caller side of the pipeline: one in-flight request per session, stale
    results dropped, optional deadline.
    """

    def __init__(
        self,
        *,
        catalog: Catalog,
        client: GenerationClient,
        sessions: SessionStore,
        settings: Settings,
    ):
        self.catalog = catalog
        self.client = client
        self.sessions = sessions
        self.settings = settings

    async def _run(self, query: str) -> AIRecommendation:
        coro = resolve_outfit(query, catalog=self.catalog, client=self.client, settings=self.settings)
        deadline = self.settings.STYLIST_DEADLINE_S
        if deadline is None:
            return await coro
        try:
            return await asyncio.wait_for(coro, timeout=deadline)
        except asyncio.TimeoutError as e:
            logger.error(f"Styling request exceeded deadline={deadline}s")
            raise RecommendationUnavailable(cause=f"deadline {deadline}s exceeded") from e

    async def style(self, query: str, session_id: Optional[str] = None) -> AIRecommendation:
        if session_id is None:
            return await self._run(query)

        if not query or not query.strip():
            raise EmptyQuery()

        ticket = await self.sessions.begin(session_id)
        logger.info(f"Styling request accepted session_id={session_id} ticket={ticket}")
        try:
            recommendation = await self._run(query)
            try:
                await self.sessions.commit(session_id, ticket, recommendation)
            except StaleRecommendation:
                logger.info(f"Dropping stale recommendation session_id={session_id} ticket={ticket}")
                raise
            return recommendation
        finally:
            await self.sessions.finish(session_id, ticket)

    async def abandon(self, session_id: str) -> None:
        logger.info(f"Session abandoned session_id={session_id}")
        await self.sessions.abandon(session_id)

    async def current(self, session_id: str) -> Optional[AIRecommendation]:
        return await self.sessions.current(session_id)
