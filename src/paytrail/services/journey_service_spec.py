"""
Tests for journey scripts.

Journeys drive the command handlers from YAML/JSON step lists; these tests
cover loading, alias resolution, defaults and error reporting.
"""
from __future__ import annotations

from pathlib import Path

import pytest

from paytrail.config import Settings
from paytrail.model.events import (
    BankChannelAssigned,
    FraudCheckCompleted,
    OptimizedPaymentFileCreated,
    PaymentFileReceived,
    PaymentFileSubmittedToBank,
)
from paytrail.model.payment_file import BankChannel, FraudCheckFailed
from paytrail.services.journey_service import (
    DEMO_JOURNEY,
    JourneyError,
    JourneyService,
    load_journey,
    parse_steps,
)
from paytrail.services.payment_file_service import PaymentFileService

SCRIPT = """\
steps:
  - command: receive
    alias: original
    id: file-1
    storage_link: /uploads/may.xml
  - command: validate
    file: original
    is_valid: true
  - command: assign-channel
    file: original
    bank_channel: SWIFT
  - command: fraud-check
    file: original
    passed: false
"""


@pytest.fixture
def journeys(service: PaymentFileService) -> JourneyService:
    return JourneyService(service, Settings(default_actor="Ops Bot", default_source="Scheduler"))


class DescribeLoadJourney:
    def it_should_load_yaml_steps(self, tmp_path: Path):
        script = tmp_path / "journey.yml"
        script.write_text(SCRIPT, encoding="utf-8")

        steps = load_journey(script)

        assert [s["command"] for s in steps] == ["receive", "validate", "assign-channel", "fraud-check"]

    def it_should_load_json_steps(self, tmp_path: Path):
        script = tmp_path / "journey.json"
        script.write_text('{"steps": [{"command": "submit", "payment_file_id": "f1"}]}', encoding="utf-8")

        assert load_journey(script) == [{"command": "submit", "payment_file_id": "f1"}]

    def it_should_fail_for_missing_files(self, tmp_path: Path):
        with pytest.raises(JourneyError, match="not found"):
            load_journey(tmp_path / "missing.yml")

    def it_should_fail_for_unparsable_files(self, tmp_path: Path):
        script = tmp_path / "broken.yml"
        script.write_text("steps: [unclosed", encoding="utf-8")

        with pytest.raises(JourneyError, match="not valid"):
            load_journey(script)

    def it_should_fail_for_files_that_are_not_utf8(self, tmp_path: Path):
        script = tmp_path / "latin1.yml"
        script.write_bytes(b"\xff\xfesteps: []")

        with pytest.raises(JourneyError, match="Cannot read journey script"):
            load_journey(script)

    def it_should_fail_for_directories(self, tmp_path: Path):
        with pytest.raises(JourneyError, match="Cannot read journey script"):
            load_journey(tmp_path)

    def it_should_require_a_steps_list(self):
        with pytest.raises(JourneyError, match="'steps' list"):
            parse_steps({"journey": []})

    def it_should_require_a_command_in_every_step(self):
        with pytest.raises(JourneyError, match="Step 2"):
            parse_steps({"steps": [{"command": "receive"}, {"file": "x"}]})

    def it_should_require_the_command_to_be_a_string(self):
        with pytest.raises(JourneyError, match="Step 1 must be a mapping with a 'command' string"):
            parse_steps({"steps": [{"command": ["receive"]}]})


class DescribeJourneyService:
    def it_should_run_steps_in_order(self, tmp_path: Path, journeys: JourneyService, service: PaymentFileService):
        script = tmp_path / "journey.yml"
        script.write_text(SCRIPT, encoding="utf-8")

        events = journeys.run(load_journey(script))

        assert [e.event_type for e in events] == [
            "PaymentFileReceived",
            "PaymentFileValidated",
            "BankChannelAssigned",
            "FraudCheckCompleted",
        ]
        assert service.get_events_by_correlation_id("file-1") == events

    def it_should_resolve_aliases_to_file_ids(self, tmp_path: Path, journeys: JourneyService):
        script = tmp_path / "journey.yml"
        script.write_text(SCRIPT, encoding="utf-8")

        events = journeys.run(load_journey(script))

        assert all(e.metadata.payment_file_id == "file-1" for e in events)
        assert journeys.aliases == {"original": "file-1"}
        assert isinstance(events[2], BankChannelAssigned)
        assert events[2].channel is BankChannel.SWIFT
        assert isinstance(events[3], FraudCheckCompleted)
        assert events[3].result == FraudCheckFailed(reason="Fraud check failed")

    def it_should_apply_default_actor_and_source(self, journeys: JourneyService):
        events = journeys.run([{"command": "receive"}])

        assert events[0].metadata.actor == "Ops Bot"
        assert events[0].metadata.source == "Scheduler"

    def it_should_generate_file_id_and_upload_link_on_receive(self, journeys: JourneyService):
        event = journeys.run([{"command": "receive", "alias": "a"}])[0]

        assert isinstance(event, PaymentFileReceived)
        assert event.payment_file.storage_link == f"/uploads/{event.payment_file.id}"
        assert journeys.aliases["a"] == event.payment_file.id

    def it_should_keep_the_demo_journey_in_one_correlation_group(
        self, journeys: JourneyService, service: PaymentFileService
    ):
        events = journeys.run(DEMO_JOURNEY)

        original = journeys.aliases["original"]
        assert service.get_correlation_ids() == [original]
        assert service.get_events_by_correlation_id(original) == events
        assert isinstance(events[5], OptimizedPaymentFileCreated)
        assert isinstance(events[6], PaymentFileSubmittedToBank)
        assert events[6].metadata.payment_file_id == journeys.aliases["optimized"]

        state = service.get_state(original)
        assert state.optimized_payment_file == events[5].payment_file
        assert state.submitted_at == events[6].metadata.created_at

    def it_should_reject_unknown_commands(self, journeys: JourneyService):
        with pytest.raises(JourneyError, match="Step 1: unknown command 'shred'"):
            journeys.run([{"command": "shred"}])

    def it_should_reject_unknown_aliases(self, journeys: JourneyService):
        with pytest.raises(JourneyError, match="unknown file alias 'ghost'"):
            journeys.run([{"command": "validate", "file": "ghost", "is_valid": True}])

    def it_should_reject_commands_that_are_not_strings(self, journeys: JourneyService):
        with pytest.raises(JourneyError, match=r"Step 1: unknown command \['receive'\]"):
            journeys.run([{"command": ["receive"]}])

    def it_should_reject_file_references_that_are_not_strings(
        self, journeys: JourneyService, service: PaymentFileService
    ):
        journeys.run([{"command": "receive", "id": "f1", "alias": "original"}])

        with pytest.raises(JourneyError, match=r"Step 1 \(validate\): file alias must be a string"):
            journeys.run([{"command": "validate", "file": ["original"], "is_valid": True}])
        with pytest.raises(JourneyError, match=r"Step 1 \(submit\): file alias must be a string"):
            journeys.run([{"command": "submit", "file": "original", "correlate": {"x": 1}}])

        assert len(service.get_all_events()) == 1

    def it_should_reject_aliases_that_are_not_strings_before_storing(
        self, journeys: JourneyService, service: PaymentFileService
    ):
        with pytest.raises(JourneyError, match=r"Step 1 \(receive\): alias must be a string"):
            journeys.run([{"command": "receive", "alias": {"name": "original"}}])

        assert service.get_all_events() == []

    def it_should_wrap_field_validation_errors(self, journeys: JourneyService):
        with pytest.raises(JourneyError, match=r"Step 1 \(validate\)"):
            journeys.run([{"command": "validate", "payment_file_id": "f1"}])

    def it_should_keep_events_stored_before_a_failing_step(
        self, journeys: JourneyService, service: PaymentFileService
    ):
        with pytest.raises(JourneyError):
            journeys.run([{"command": "receive", "id": "f1"}, {"command": "nope"}])

        assert len(service.get_all_events()) == 1
