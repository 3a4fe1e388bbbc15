"""Tests for service level derivation and message classification."""

from __future__ import annotations

import json

import pytest

from tests.fakes import STATUS_MESSAGE, status_json
from xbl_status.status.classify import (
    LEVEL_TEXT,
    apply_message,
    determine_level,
    level_text,
    normalize_service,
    parse_envelope,
)
from xbl_status.status.models import FailureKind, FetchResult, ServiceLevel
from xbl_status.status.wire import RawServiceStatus


class TestDetermineLevel:
    @pytest.mark.parametrize("description", ["", None, "Up", "Mostly Up", "Fully Operational"])
    def test_not_operational_is_always_inoperational(self, description):
        assert determine_level(False, description) is ServiceLevel.INOPERATIONAL

    @pytest.mark.parametrize("description", ["Mostly Up", "Services are Mostly fine", "Mostly"])
    def test_mostly(self, description):
        assert determine_level(True, description) is ServiceLevel.MOSTLY

    @pytest.mark.parametrize("description", ["", None, "Up and running", "mostly up", "MOSTLY"])
    def test_fully(self, description):
        assert determine_level(True, description) is ServiceLevel.FULLY


class TestLevelText:
    def test_mapping(self):
        assert level_text(ServiceLevel.FULLY) == "Fully Operational"
        assert level_text(ServiceLevel.MOSTLY) == "Mostly Operational"
        assert level_text(ServiceLevel.INOPERATIONAL) == "Inoperational"
        assert level_text(ServiceLevel.UNKNOWN) == "Unknown"

    def test_covers_every_level(self):
        assert set(LEVEL_TEXT) == set(ServiceLevel)


class TestNormalizeService:
    def test_copies_fields(self):
        svc = normalize_service(RawServiceStatus(name="Core", description="", color="#0c0"))
        assert svc.name == "Core"
        assert svc.description == ""
        assert svc.is_operational
        assert svc.level is ServiceLevel.FULLY
        assert svc.level_text == "Fully Operational"

    def test_custom_operational_color(self):
        raw = RawServiceStatus(name="Core", description="Mostly Up", color="#00cc00")
        assert normalize_service(raw).level is ServiceLevel.INOPERATIONAL
        assert normalize_service(raw, operational_color="#00cc00").level is ServiceLevel.MOSTLY


class TestParseEnvelope:
    @pytest.mark.parametrize("text", ["null", "{}", "[]", '""'])
    def test_null_or_empty(self, text):
        r = FetchResult()
        assert parse_envelope(text, r) is None
        assert r.error_kind is FailureKind.MALFORMED_PAYLOAD
        assert r.error_message == "Invalid data received from WebSocket."

    def test_not_json(self):
        r = FetchResult()
        assert parse_envelope("<html>", r) is None
        assert r.error_kind is FailureKind.MALFORMED_PAYLOAD
        assert r.error_message.startswith("Invalid data received from WebSocket:")

    def test_wrong_shape(self):
        r = FetchResult()
        assert parse_envelope(json.dumps({"message_type": "xbl_status", "services": "nope"}), r) is None
        assert r.error_kind is FailureKind.MALFORMED_PAYLOAD


class TestApplyMessage:
    def test_scenario_fully(self):
        r = FetchResult()
        text = '{"message_type":"xbl_status","services":[{"name":"Core","description":"","color":"#0c0"}]}'
        assert apply_message(text, r)
        assert r.success
        assert r.error_message is None
        assert len(r.services) == 1
        svc = r.services[0]
        assert (svc.name, svc.is_operational, svc.level, svc.level_text) == (
            "Core",
            True,
            ServiceLevel.FULLY,
            "Fully Operational",
        )

    def test_scenario_mostly(self):
        r = FetchResult()
        text = '{"message_type":"xbl_status","services":[{"name":"Core","description":"Mostly Up","color":"#0c0"}]}'
        assert apply_message(text, r)
        assert r.services[0].level is ServiceLevel.MOSTLY
        assert r.services[0].level_text == "Mostly Operational"

    def test_scenario_down(self):
        r = FetchResult()
        text = '{"message_type":"xbl_status","services":[{"name":"Core","description":"Down","color":"#f00"}]}'
        assert apply_message(text, r)
        assert not r.services[0].is_operational
        assert r.services[0].level is ServiceLevel.INOPERATIONAL

    def test_scenario_stats_without_services(self):
        r = FetchResult()
        assert not apply_message('{"message_type":"stats"}', r)
        assert not r.success
        assert r.error_kind is FailureKind.UNSUPPORTED_MESSAGE
        assert r.error_message == "Invalid response format received."

    def test_unknown_type_with_services(self):
        r = FetchResult()
        assert not apply_message(status_json(message_type="heartbeat"), r)
        assert r.error_kind is FailureKind.UNSUPPORTED_MESSAGE
        assert r.services == []

    def test_preserves_order_and_count(self):
        r = FetchResult()
        assert apply_message(status_json(), r)
        assert [s.name for s in r.services] == [s["name"] for s in STATUS_MESSAGE["services"]]
        assert [s.level for s in r.services] == [
            ServiceLevel.FULLY,
            ServiceLevel.MOSTLY,
            ServiceLevel.INOPERATIONAL,
        ]

    def test_empty_services_is_success(self):
        r = FetchResult()
        assert apply_message(status_json(services=[]), r)
        assert r.success
        assert r.services == []

    def test_substring_status_type_accepted(self):
        r = FetchResult()
        assert apply_message(status_json(message_type="live_status_update"), r)
        assert r.success
