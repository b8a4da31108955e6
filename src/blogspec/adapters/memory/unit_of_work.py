"""InMemoryUnitOfWork: records commits and rollbacks for unit tests."""

from __future__ import annotations

from ...ports.unit_of_work import UnitOfWork


class InMemoryUnitOfWork(UnitOfWork):
    """Unit of Work with no store behind it.

    Pairs with :class:`InMemoryRepository`, whose writes apply immediately,
    so the only thing to observe is whether the scope committed or rolled
    back, and how often.
    """

    def __init__(self) -> None:
        super().__init__()
        self.commit_count = 0
        self.rollback_count = 0

    @property
    def committed(self) -> bool:
        return self.commit_count > 0

    @property
    def rolled_back(self) -> bool:
        return self.rollback_count > 0

    async def commit(self) -> None:
        self.commit_count += 1

    async def rollback(self) -> None:
        self.rollback_count += 1
