"""
Slot Allocator
Serialises placement changes and re-derives slot counts
"""
import asyncio
from contextlib import AsyncExitStack, asynccontextmanager
from typing import AsyncIterator, Dict, Hashable, Iterable, List

from loguru import logger

from internhub.application.repositories.interfaces import IRecordGateway
from internhub.core.exceptions import RepositoryException
from internhub.domain.entities import Application, Internship


class KeyedLocks:
    """One asyncio.Lock per key, created on first use"""

    def __init__(self):
        self._locks: Dict[Hashable, asyncio.Lock] = {}

    def get(self, key: Hashable) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    @asynccontextmanager
    async def hold(self, keys: Iterable[Hashable]) -> AsyncIterator[None]:
        """Acquire several keys in sorted order"""
        async with AsyncExitStack() as stack:
            for key in sorted(set(keys)):
                await stack.enter_async_context(self.get(key))
            yield


class SlotAllocator:
    """
    Owns the lock regions of the engine and the slot recount.

    Lock order is always student, then creator, then internships by id.
    """

    def __init__(self, gateway: IRecordGateway):
        self.gateway = gateway
        self._students = KeyedLocks()
        self._creators = KeyedLocks()
        self._internships = KeyedLocks()

    def student(self, student_id: str) -> asyncio.Lock:
        return self._students.get(student_id)

    def creator(self, creator_id: str) -> asyncio.Lock:
        return self._creators.get(creator_id)

    def internships(self, internship_ids: Iterable[int]):
        return self._internships.hold(internship_ids)

    def recount(self, internships: Iterable[Internship]) -> List[Internship]:
        """
        Re-derive filled slots from the authoritative application set.
        Caller must hold the internship locks.

        Returns:
            Internships whose slot count or status changed
        """
        changed = []
        for internship in internships:
            before = internship.filled_slots
            if internship.recount_slots():
                logger.info(
                    f"Internship {internship.id} slots {before} -> {internship.filled_slots}"
                    f"/{internship.num_slots}, status {internship.status.value}"
                )
                changed.append(internship)
        return changed

    async def persist(
        self,
        applications: Iterable[Application] = (),
        internships: Iterable[Internship] = (),
    ) -> None:
        """
        Save every touched record before the operation returns.

        A failure leaves the in-memory change in place; the error is logged
        and propagated to the caller.
        """
        for application in applications:
            try:
                await self.gateway.save_application(application)
            except RepositoryException:
                logger.error(
                    f"Application {application.id} changed in memory to {application.status.value} "
                    f"but was not saved"
                )
                raise
        for internship in internships:
            try:
                await self.gateway.save_internship(internship)
            except RepositoryException:
                logger.error(
                    f"Internship {internship.id} changed in memory "
                    f"(status {internship.status.value}, slots {internship.filled_slots}) but was not saved"
                )
                raise
