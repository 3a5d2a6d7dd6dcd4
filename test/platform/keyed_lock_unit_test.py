import anyio
import pytest

from src.platform.exception.exceptions import ServiceBusyError
from src.platform.state.keyed_lock import KeyedLockRegistry
from src.service.shared_kernel.domain.boarding_errors import TripBusyError


@pytest.mark.unit
class TestKeyedLockRegistry:
    @pytest.mark.asyncio
    async def test_same_key_is_serialized(self):
        registry = KeyedLockRegistry(timeout_seconds=1.0)
        order: list[str] = []

        async def worker(name: str) -> None:
            async with registry.hold('trip:1'):
                order.append(f'{name}-in')
                await anyio.sleep(0.01)
                order.append(f'{name}-out')

        async with anyio.create_task_group() as tg:
            tg.start_soon(worker, 'a')
            tg.start_soon(worker, 'b')

        # No interleaving inside the critical section
        assert order in (
            ['a-in', 'a-out', 'b-in', 'b-out'],
            ['b-in', 'b-out', 'a-in', 'a-out'],
        )

    @pytest.mark.asyncio
    async def test_different_keys_do_not_block_each_other(self):
        registry = KeyedLockRegistry(timeout_seconds=0.1)

        async with registry.hold('trip:1'):
            async with registry.hold('trip:2'):
                assert registry.is_locked('trip:1')
                assert registry.is_locked('trip:2')

        assert not registry.is_locked('trip:1')

    @pytest.mark.asyncio
    async def test_timeout_raises_service_busy_by_default(self):
        registry = KeyedLockRegistry(timeout_seconds=0.05)

        async with registry.hold('trip:1'):
            with pytest.raises(ServiceBusyError):
                async with registry.hold('trip:1'):
                    pass

    @pytest.mark.asyncio
    async def test_timeout_raises_custom_error(self):
        registry = KeyedLockRegistry(timeout_seconds=0.05)

        async with registry.hold('trip:7'):
            with pytest.raises(TripBusyError) as exc_info:
                async with registry.hold('trip:7', on_timeout=lambda: TripBusyError(7)):
                    pass

        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_lock_released_after_exception(self):
        registry = KeyedLockRegistry(timeout_seconds=0.05)

        with pytest.raises(RuntimeError):
            async with registry.hold('trip:1'):
                raise RuntimeError('boom')

        async with registry.hold('trip:1'):
            assert registry.is_locked('trip:1')

    @pytest.mark.asyncio
    async def test_released_keys_are_forgotten(self):
        registry = KeyedLockRegistry(timeout_seconds=0.05)

        for trip_id in range(1000):
            async with registry.hold(f'trip:{trip_id}'):
                assert len(registry) == 1

        assert len(registry) == 0

    @pytest.mark.asyncio
    async def test_key_kept_while_someone_waits(self):
        registry = KeyedLockRegistry(timeout_seconds=1.0)
        entered = anyio.Event()

        async def waiter() -> None:
            async with registry.hold('trip:1'):
                entered.set()

        async with registry.hold('trip:1'):
            async with anyio.create_task_group() as tg:
                tg.start_soon(waiter)
                await anyio.sleep(0.01)
                assert len(registry) == 1
                tg.cancel_scope.cancel()

        assert len(registry) == 0

        async with anyio.create_task_group() as tg:
            async with registry.hold('trip:1'):
                tg.start_soon(waiter)
                await anyio.sleep(0.01)
            with anyio.fail_after(1.0):
                await entered.wait()

        assert len(registry) == 0

    @pytest.mark.asyncio
    async def test_timed_out_waiter_does_not_leak(self):
        registry = KeyedLockRegistry(timeout_seconds=0.05)

        async with registry.hold('trip:3'):
            with pytest.raises(ServiceBusyError):
                async with registry.hold('trip:3'):
                    pass
            assert len(registry) == 1

        assert len(registry) == 0
