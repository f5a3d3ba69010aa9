"""Tests for LockProvider implementations.

Tests cover:
- InMemoryLockProvider per-resource serialization
- Lock release on exception
- Timeouts
- acquire_all() ordering
- NoOpLockProvider for single-threaded tests
"""

import threading
import time
from concurrent.futures import ThreadPoolExecutor, wait

import pytest

from invoicing_core.application.ports import LockProvider
from invoicing_core.application.ports.lock_provider import (
    customer_email_lock_key,
    customer_lock_key,
    invoice_lock_key,
)
from invoicing_core.domain.value_objects import CustomerId, InvoiceId
from invoicing_core.infrastructure.lock_provider import (
    InMemoryLockProvider,
    NoOpLockProvider,
)

# =============================================================================
# Lock keys
# =============================================================================


class TestLockKeys:
    def test_invoice_key(self) -> None:
        invoice_id = InvoiceId.from_string("550e8400-e29b-41d4-a716-446655440000")

        assert invoice_lock_key(invoice_id) == "invoice:550e8400-e29b-41d4-a716-446655440000"

    def test_customer_key_differs_from_invoice_key_for_same_uuid(self) -> None:
        uuid_str = "550e8400-e29b-41d4-a716-446655440000"

        assert customer_lock_key(CustomerId.from_string(uuid_str)) != invoice_lock_key(
            InvoiceId.from_string(uuid_str)
        )

    def test_email_key_is_normalized(self) -> None:
        assert customer_email_lock_key(" A@Acme.Example ") == "customer-email:a@acme.example"


# =============================================================================
# InMemoryLockProvider
# =============================================================================


class TestInMemoryLockProviderBasics:
    def test_implements_lock_provider_interface(self) -> None:
        assert isinstance(InMemoryLockProvider(), LockProvider)

    def test_same_resource_can_be_acquired_sequentially(self) -> None:
        provider = InMemoryLockProvider()
        acquisitions = 0

        with provider.acquire("invoice:1"):
            acquisitions += 1
        with provider.acquire("invoice:1"):
            acquisitions += 1

        assert acquisitions == 2

    def test_different_resources_use_different_locks(self) -> None:
        provider = InMemoryLockProvider()

        with provider.acquire("invoice:1"), provider.acquire("invoice:2"):
            pass

    def test_same_lock_reused_for_same_resource(self) -> None:
        provider = InMemoryLockProvider()

        with provider.acquire("invoice:1"):
            first = provider._locks["invoice:1"]
        with provider.acquire("invoice:1"):
            second = provider._locks["invoice:1"]

        assert first is second

    def test_lock_released_on_exception(self) -> None:
        provider = InMemoryLockProvider(timeout=1.0)

        with pytest.raises(RuntimeError), provider.acquire("invoice:1"):
            raise RuntimeError("Simulated failure")

        with provider.acquire("invoice:1"):
            pass


class TestInMemoryLockProviderTimeout:
    def test_times_out_when_lock_is_held(self) -> None:
        provider = InMemoryLockProvider(timeout=0.05)
        held = threading.Event()
        release = threading.Event()

        def holder() -> None:
            with provider.acquire("invoice:1"):
                held.set()
                release.wait(timeout=5)

        thread = threading.Thread(target=holder)
        thread.start()
        held.wait(timeout=5)
        try:
            with pytest.raises(TimeoutError, match="invoice:1"), provider.acquire("invoice:1"):
                pass
        finally:
            release.set()
            thread.join()

    def test_other_resource_not_affected(self) -> None:
        provider = InMemoryLockProvider(timeout=0.05)

        with provider.acquire("invoice:1"), provider.acquire("invoice:2"):
            pass


class TestInMemoryLockProviderConcurrency:
    def test_same_resource_serializes_access(self) -> None:
        provider = InMemoryLockProvider()
        inside = 0
        max_inside = 0
        count_lock = threading.Lock()

        def worker() -> None:
            nonlocal inside, max_inside
            with provider.acquire("invoice:shared"):
                with count_lock:
                    inside += 1
                    max_inside = max(max_inside, inside)
                time.sleep(0.01)
                with count_lock:
                    inside -= 1

        with ThreadPoolExecutor(max_workers=4) as executor:
            wait([executor.submit(worker) for _ in range(8)])

        assert max_inside == 1

    def test_different_resources_allow_parallel_access(self) -> None:
        provider = InMemoryLockProvider()
        barrier = threading.Barrier(3, timeout=5)

        def worker(resource_id: str) -> None:
            with provider.acquire(resource_id):
                # Only passes if all three hold their locks at the same time
                barrier.wait()

        with ThreadPoolExecutor(max_workers=3) as executor:
            futures = [executor.submit(worker, f"invoice:{i}") for i in range(3)]
            wait(futures)

        for future in futures:
            future.result()


# =============================================================================
# acquire_all
# =============================================================================


class TestAcquireAll:
    def test_holds_every_lock(self) -> None:
        provider = InMemoryLockProvider(timeout=0.05)

        with provider.acquire_all(["customer:1", "customer-email:a@b.co"]):
            assert provider._locks["customer:1"].locked()
            assert provider._locks["customer-email:a@b.co"].locked()

        assert not provider._locks["customer:1"].locked()

    def test_duplicates_acquired_once(self) -> None:
        provider = InMemoryLockProvider(timeout=0.05)

        with provider.acquire_all(["customer:1", "customer:1"]):
            pass

    def test_opposite_orders_do_not_deadlock(self) -> None:
        provider = InMemoryLockProvider(timeout=5)
        keys = ["customer:1", "customer-email:a@b.co"]

        def worker(reverse: bool) -> None:
            for _ in range(20):
                with provider.acquire_all(reversed(keys) if reverse else keys):
                    pass

        with ThreadPoolExecutor(max_workers=2) as executor:
            futures = [executor.submit(worker, flag) for flag in (False, True)]
            wait(futures)

        for future in futures:
            future.result()


# =============================================================================
# NoOpLockProvider
# =============================================================================


class TestNoOpLockProvider:
    def test_implements_lock_provider_interface(self) -> None:
        assert isinstance(NoOpLockProvider(), LockProvider)

    def test_same_resource_can_be_nested(self) -> None:
        provider = NoOpLockProvider()
        acquisitions = 0

        with provider.acquire("invoice:1"):
            acquisitions += 1
            with provider.acquire("invoice:1"):
                acquisitions += 1

        assert acquisitions == 2

    def test_exception_propagates(self) -> None:
        provider = NoOpLockProvider()

        with pytest.raises(RuntimeError, match="test error"), provider.acquire("invoice:1"):
            raise RuntimeError("test error")
