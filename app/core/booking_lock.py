"""Per court and date mutex serializing booking admission."""
import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import date
from typing import AsyncIterator, Dict, Tuple

logger = logging.getLogger(__name__)

LockKey = Tuple[int, date]


@dataclass
class _LockEntry:
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    holders: int = 0


class CourtDateLocks:
    """
    Registry of asyncio locks keyed by (court_id, booking_date).

    Admission holds the lock across its overlap check, insert and commit, so
    two requests for the same court and date in this process never both pass
    the check. Entries are dropped once no coroutine holds or awaits them.
    Cross-process races are caught by the unique index on active bookings.
    """

    def __init__(self):
        self._entries: Dict[LockKey, _LockEntry] = {}

    @asynccontextmanager
    async def hold(self, court_id: int, booking_date: date) -> AsyncIterator[None]:
        key = (court_id, booking_date)
        entry = self._entries.get(key)
        if entry is None:
            entry = self._entries[key] = _LockEntry()
        entry.holders += 1
        try:
            async with entry.lock:
                logger.debug(f"Acquired admission lock for court {court_id} on {booking_date}")
                yield
        finally:
            entry.holders -= 1
            if entry.holders == 0:
                self._entries.pop(key, None)

    def __len__(self) -> int:
        return len(self._entries)


# Singleton instance
court_date_locks = CourtDateLocks()
