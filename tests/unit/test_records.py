"""
Unit tests for DNS record variants.

Verifies that each record type accepts exactly its own fields and maps to
the API's wire names without unset optionals.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from core.domain.records import (
    DynamicRecord,
    MxRecord,
    RecordChanges,
    RecordType,
    ServiceBindingRecord,
    SimpleRecord,
    SrvRecord,
    SshfpRecord,
    build_record_spec,
    edit_wire_params,
    record_wire_params,
)


class TestBuildRecordSpec:
    def test_a_record(self) -> None:
        spec = build_record_spec(RecordType.A, "@", content="1.2.3.4", ttl=3600)

        assert isinstance(spec, SimpleRecord)
        assert spec.type == "A"

    def test_mx_record(self) -> None:
        spec = build_record_spec("MX", "@", content="mail.example.com", priority=10)

        assert isinstance(spec, MxRecord)
        assert spec.priority == 10

    def test_srv_record(self) -> None:
        spec = build_record_spec(
            RecordType.SRV, "_sip._tcp", content="sip.example.com", ttl=3600, priority=10, weight=5, port=5060
        )

        assert isinstance(spec, SrvRecord)

    def test_https_record(self) -> None:
        spec = build_record_spec(RecordType.HTTPS, "@", priority=1, target=".", value="alpn=h2,h3")

        assert isinstance(spec, ServiceBindingRecord)
        assert spec.value == "alpn=h2,h3"

    def test_sshfp_record(self) -> None:
        spec = build_record_spec(RecordType.SSHFP, "@", content="abcdef", ssh_algorithm=4, ssh_type=2)

        assert isinstance(spec, SshfpRecord)

    def test_dynamic_record_needs_only_name(self) -> None:
        spec = build_record_spec(RecordType.DYNAMIC, "home")

        assert isinstance(spec, DynamicRecord)

    def test_mx_without_priority_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            build_record_spec(RecordType.MX, "@", content="mail.example.com")

    def test_simple_record_without_content_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            build_record_spec(RecordType.TXT, "@")

    def test_field_not_accepted_by_type_is_rejected(self) -> None:
        """Weight only makes sense on SRV records."""
        with pytest.raises(ValidationError):
            build_record_spec(RecordType.A, "@", content="1.2.3.4", weight=5)

    def test_sshfp_algorithm_range(self) -> None:
        with pytest.raises(ValidationError):
            build_record_spec(RecordType.SSHFP, "@", content="ab", ssh_algorithm=9, ssh_type=1)

    def test_unknown_type(self) -> None:
        with pytest.raises(ValueError):
            build_record_spec("BOGUS", "@", content="x")


class TestWireParams:
    def test_a_record_omits_unset_optionals(self) -> None:
        spec = build_record_spec(RecordType.A, "@", content="1.2.3.4", ttl=3600)

        assert record_wire_params("example.com", spec) == {
            "domain": "example.com",
            "type": "A",
            "name": "@",
            "content": "1.2.3.4",
            "ttl": 3600,
        }

    def test_priority_travels_as_prio(self) -> None:
        spec = build_record_spec(RecordType.MX, "@", content="mail.example.com", priority=10)

        params = record_wire_params("example.com", spec)

        assert params["prio"] == 10
        assert "priority" not in params

    def test_srv_field_order(self) -> None:
        spec = build_record_spec(
            RecordType.SRV, "_sip._tcp", content="sip.example.com", ttl=3600, priority=10, weight=5, port=5060
        )

        assert list(record_wire_params("example.com", spec)) == [
            "domain",
            "type",
            "name",
            "content",
            "ttl",
            "prio",
            "weight",
            "port",
        ]

    def test_dynamic_record(self) -> None:
        spec = build_record_spec(RecordType.DYNAMIC, "home")

        assert record_wire_params("example.com", spec) == {"domain": "example.com", "type": "Dynamic", "name": "home"}

    def test_edit_params_only_include_changes(self) -> None:
        changes = RecordChanges(content="5.6.7.8", ttl=300)

        assert edit_wire_params("example.com", "rec123", changes) == {
            "domain": "example.com",
            "id": "rec123",
            "content": "5.6.7.8",
            "ttl": 300,
        }

    def test_edit_params_rename_and_priority(self) -> None:
        changes = RecordChanges(name="www", priority=20)

        assert edit_wire_params("example.com", "rec1", changes) == {
            "domain": "example.com",
            "id": "rec1",
            "name": "www",
            "prio": 20,
        }

    def test_empty_changes(self) -> None:
        assert RecordChanges().is_empty()
        assert not RecordChanges(ttl=60).is_empty()
