"""Post-registration validation.

Answers "is this domain properly registered in my account?" with four
independent checks, so a script can gate on `valid` and a human can see
which check failed.
"""

from __future__ import annotations

import logging

from core.domain.exceptions import NjallaError
from core.domain.models import ValidationChecks, ValidationResult
from core.interfaces.gateway import ApiGateway

logger = logging.getLogger(__name__)


def validate_registration(gateway: ApiGateway, domain: str) -> ValidationResult:
    checks = ValidationChecks()

    try:
        info = gateway.get_domain(domain)
    except NjallaError as exc:
        logger.info("get-domain failed for %s: %s", domain, exc)
        return ValidationResult(domain=domain, valid=False, checks=checks, error=str(exc))

    checks.exists = True
    checks.status_active = info.status == "active"
    checks.has_expiry = info.expiry is not None

    records = None
    error = None
    try:
        records = gateway.list_records(domain)
        checks.dns_accessible = True
    except NjallaError as exc:
        logger.info("list-records failed for %s: %s", domain, exc)
        error = str(exc)

    return ValidationResult(
        domain=domain,
        valid=checks.all_passed(),
        checks=checks,
        domain_info=info,
        dns_records=records,
        error=error,
    )
