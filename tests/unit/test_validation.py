"""
Unit tests for post-registration validation.

Each check is independent: a failed DNS listing must not hide the domain
checks that passed, and a missing domain stops before listing records.
"""

from __future__ import annotations

from datetime import datetime, timezone

from conftest import FakeGateway
from core.domain.exceptions import ApiRejectedError
from core.domain.models import Domain, Record
from core.services.validation import validate_registration

EXPIRY = datetime(2027, 1, 1, tzinfo=timezone.utc)


def _domain(status: str = "active", expiry: datetime | None = EXPIRY) -> Domain:
    return Domain(name="example.com", status=status, expiry=expiry)


def _record() -> Record:
    return Record(id="rec1", name="@", type="A", content="1.2.3.4", ttl=3600)


class TestValidateRegistration:
    def test_all_checks_pass(self) -> None:
        gateway = FakeGateway(domain=_domain(), records=[_record()])

        result = validate_registration(gateway, "example.com")

        assert result.valid is True
        assert result.checks.all_passed()
        assert result.domain_info is not None
        assert result.dns_records is not None and len(result.dns_records) == 1
        assert result.error is None

    def test_no_records_still_counts_as_accessible(self) -> None:
        gateway = FakeGateway(domain=_domain(), records=[])

        result = validate_registration(gateway, "example.com")

        assert result.valid is True
        assert result.dns_records == []

    def test_unknown_domain(self) -> None:
        gateway = FakeGateway(domain_error=ApiRejectedError("Domain not found"))

        result = validate_registration(gateway, "example.com")

        assert result.valid is False
        assert result.checks.exists is False
        assert result.error == "API error: Domain not found"
        assert gateway.count("list-records") == 0

    def test_inactive_domain(self) -> None:
        gateway = FakeGateway(domain=_domain(status="pending"))

        result = validate_registration(gateway, "example.com")

        assert result.valid is False
        assert result.checks.exists is True
        assert result.checks.status_active is False
        assert result.checks.dns_accessible is True

    def test_missing_expiry(self) -> None:
        gateway = FakeGateway(domain=_domain(expiry=None))

        result = validate_registration(gateway, "example.com")

        assert result.valid is False
        assert result.checks.has_expiry is False

    def test_dns_listing_failure(self) -> None:
        gateway = FakeGateway(domain=_domain(), records_error=ApiRejectedError("Permission denied"))

        result = validate_registration(gateway, "example.com")

        assert result.valid is False
        assert result.checks.status_active is True
        assert result.checks.dns_accessible is False
        assert result.dns_records is None
        assert result.error == "API error: Permission denied"
