"""
Tests for the in-memory event store (log + correlation index).
"""
from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from paytrail.model.events import EventMetadata, PaymentFileValidated
from paytrail.storage.event_store import EventStore


def _validated(file_id: str, n: int = 0) -> PaymentFileValidated:
    return PaymentFileValidated(
        metadata=EventMetadata(payment_file_id=file_id, actor=f"worker-{n}", source="spec"),
        is_valid=n % 2 == 0,
    )


class DescribeEventStore:
    def it_should_initialize_empty(self, event_store: EventStore):
        assert event_store.get_all_events() == []
        assert event_store.get_correlation_ids() == []
        assert event_store.list_known_correlation_ids() == set()
        assert event_store.get_latest_sequence_number() == 0

    def it_should_append_and_index_an_event(self, event_store: EventStore):
        event = _validated("f1")

        stored = event_store.append_event(event)

        assert stored is event
        assert event_store.get_all_events() == [event]
        assert event_store.get_events("f1") == [event]
        assert event_store.get_latest_sequence_number() == 1

    def it_should_return_events_since_a_sequence_number(self, event_store: EventStore):
        events = [event_store.append_event(_validated("f1", n)) for n in range(4)]

        assert event_store.get_events_since(2) == events[2:]

    def it_should_give_identical_results_on_repeated_reads(self, event_store: EventStore):
        for n in range(6):
            event_store.append_event(_validated(f"f{n % 3}", n))

        assert event_store.get_all_events() == event_store.get_all_events()
        assert event_store.get_events("f1") == event_store.get_events("f1")
        assert event_store.list_known_correlation_ids() == event_store.list_known_correlation_ids()
        assert event_store.get_correlation_ids() == ["f0", "f1", "f2"]

    def it_should_partition_concurrent_appends_across_correlation_groups(self, event_store: EventStore):
        correlation_ids = [f"file-{i}" for i in range(10)]
        barrier = threading.Barrier(10)

        def append_batch(worker: int) -> None:
            barrier.wait()
            for n in range(10):
                event_store.append_event(_validated(correlation_ids[(worker + n) % 10], worker))

        with ThreadPoolExecutor(max_workers=10) as pool:
            list(pool.map(append_batch, range(10)))

        all_events = event_store.get_all_events()
        assert len(all_events) == 100

        buckets = [event_store.get_events(cid) for cid in correlation_ids]
        bucketed_ids = [e.metadata.event_id for bucket in buckets for e in bucket]
        assert len(bucketed_ids) == 100
        assert sorted(bucketed_ids) == sorted(e.metadata.event_id for e in all_events)
        assert all(len(bucket) == 10 for bucket in buckets)

    def it_should_keep_group_order_consistent_with_global_order(self, event_store: EventStore):
        def append_many(worker: int) -> None:
            for n in range(25):
                event_store.append_event(_validated(f"file-{n % 4}", worker))

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(append_many, range(8)))

        position = {e.metadata.event_id: i for i, e in enumerate(event_store.get_all_events())}
        for cid in event_store.get_correlation_ids():
            positions = [position[e.metadata.event_id] for e in event_store.get_events(cid)]
            assert positions == sorted(positions)

    def it_should_leave_log_and_index_unchanged_when_a_subscriber_fails(self, event_store: EventStore):
        kept = event_store.append_event(_validated("f1"))

        def reject(event):
            raise RuntimeError("subscriber down")

        event_store.log.subscribe(reject, replay=False)

        with pytest.raises(RuntimeError):
            event_store.append_event(_validated("f1", 1))
        with pytest.raises(RuntimeError):
            event_store.append_event(_validated("f2", 2))

        assert event_store.get_all_events() == [kept]
        assert event_store.get_events("f1") == [kept]
        assert event_store.get_events("f2") == []
        assert event_store.get_correlation_ids() == ["f1"]
        assert event_store.get_latest_sequence_number() == 1
