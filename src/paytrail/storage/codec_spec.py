"""
Tests for event JSON encoding.
"""
from __future__ import annotations

import json

import pytest

from paytrail.model.events import EventMetadata, FraudCheckCompleted, PaymentFileSubmittedToBank
from paytrail.model.payment_file import FraudCheckFailed
from paytrail.storage.codec import EVENT_TYPE_MAP, decode_event, encode_event, encode_events


class DescribeEventCodec:
    def it_should_map_every_event_type(self):
        assert set(EVENT_TYPE_MAP) == {
            "PaymentFileReceived",
            "PaymentFileValidated",
            "BankChannelAssigned",
            "FraudCheckCompleted",
            "PaymentFileOptimized",
            "OptimizedPaymentFileCreated",
            "PaymentFileSubmittedToBank",
        }

    def it_should_restore_the_concrete_variant(self):
        event = FraudCheckCompleted(
            metadata=EventMetadata(payment_file_id="f1", actor="a", source="s"),
            result=FraudCheckFailed(reason="mismatch"),
        )

        restored = decode_event(encode_event(event))

        assert isinstance(restored, FraudCheckCompleted)
        assert restored == event

    def it_should_reject_unknown_event_types(self):
        with pytest.raises(ValueError, match="Unknown event type"):
            decode_event('{"event_type": "PaymentFileShredded"}')

    def it_should_encode_lists_as_json_arrays(self):
        event = PaymentFileSubmittedToBank(
            metadata=EventMetadata(payment_file_id="f1", actor="a", source="s")
        )

        data = json.loads(encode_events([event]))

        assert data[0]["event_type"] == "PaymentFileSubmittedToBank"
        assert data[0]["metadata"]["payment_file_id"] == "f1"
        assert data[0]["metadata"]["correlation_id"] is None
