from asyncio import Lock
from contextlib import asynccontextmanager


class AccountLockManager:
    """Per-address mutual exclusion for account mutations.

    Operations on the same address never interleave; different addresses
    proceed concurrently. Registrations share one registry lock so that the
    registry append is serialized.

    An address keeps its Lock only while some operation holds or waits for
    it; the entry is dropped when the last one leaves.
    """

    def __init__(self):
        self.locks = {}  # address -> Lock
        self.users = {}  # address -> operations holding or waiting for the Lock
        self.lock = Lock()  # guards locks and users
        self.registry_lock = Lock()

    @asynccontextmanager
    async def account(self, address: str):
        """Hold the lock of ``address`` for the duration of the block

        Args:
            address (str): Account key
        """
        async with self.lock:
            account_lock = self.locks.setdefault(address, Lock())
            self.users[address] = self.users.get(address, 0) + 1
        try:
            async with account_lock:
                yield
        finally:
            async with self.lock:
                self.users[address] -= 1
                if self.users[address] == 0:
                    del self.users[address]
                    del self.locks[address]

    @asynccontextmanager
    async def registry(self):
        async with self.registry_lock:
            yield
