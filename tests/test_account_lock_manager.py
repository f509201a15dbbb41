import asyncio

from hero_quest.account_lock_manager import AccountLockManager


async def test_operations_on_one_account_do_not_interleave():
    manager = AccountLockManager()
    trace = []

    async def operation(name):
        async with manager.account("a"):
            trace.append(f"{name}-start")
            await asyncio.sleep(0.01)
            trace.append(f"{name}-end")

    await asyncio.gather(operation("first"), operation("second"))

    assert trace in (
        ["first-start", "first-end", "second-start", "second-end"],
        ["second-start", "second-end", "first-start", "first-end"],
    )


async def test_waiters_share_the_lock_while_it_is_held():
    manager = AccountLockManager()
    inside = asyncio.Event()
    release = asyncio.Event()
    trace = []

    async def holder():
        async with manager.account("a"):
            inside.set()
            await release.wait()
            trace.append("holder-end")

    async def waiter():
        async with manager.account("a"):
            trace.append("waiter-start")

    first = asyncio.create_task(holder())
    await inside.wait()
    second = asyncio.create_task(waiter())
    for _ in range(3):
        await asyncio.sleep(0)

    assert manager.users["a"] == 2
    release.set()
    await asyncio.gather(first, second)

    assert trace == ["holder-end", "waiter-start"]
    assert manager.locks == {}


async def test_exclusion_holds_after_entry_is_dropped():
    manager = AccountLockManager()
    trace = []

    async def operation(name):
        async with manager.account("a"):
            trace.append(f"{name}-start")
            await asyncio.sleep(0.01)
            trace.append(f"{name}-end")

    await operation("first")
    assert manager.locks == {}

    await asyncio.gather(operation("second"), operation("third"))

    assert trace[:2] == ["first-start", "first-end"]
    for start in (2, 4):
        name = trace[start].split("-")[0]
        assert trace[start + 1] == f"{name}-end"
    assert manager.locks == {}
    assert manager.users == {}


async def test_different_accounts_run_concurrently():
    manager = AccountLockManager()
    inside = asyncio.Event()
    release = asyncio.Event()

    async def hold_a():
        async with manager.account("a"):
            inside.set()
            await release.wait()

    holder = asyncio.create_task(hold_a())
    await inside.wait()

    async with manager.account("b"):
        reached = True
    release.set()
    await holder

    assert reached
    assert manager.locks == {}


async def test_lock_entry_released_when_block_raises():
    manager = AccountLockManager()

    try:
        async with manager.account("a"):
            raise ValueError("boom")
    except ValueError:
        pass

    assert manager.locks == {}
    assert manager.users == {}
