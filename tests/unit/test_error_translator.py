"""
Unit tests for the error translator.

These tests verify the fixed mapping from failures to caller responses.
"""

import pytest

from src.domain.exceptions import (
    InternalGatewayException,
    MissingIdentifierException,
    UpstreamProtocolException,
    UpstreamRejectedException,
    UpstreamTimeoutException,
    UpstreamUnreachableException,
    ValidationException,
)
from src.presentation.middleware.error_handler import translate_exception


class TestTranslateException:

    def test_validation(self):
        translation = translate_exception(ValidationException("Invalid cost", field="cost"))

        assert translation.status_code == 400
        assert translation.body == {"error": "Invalid cost"}

    def test_missing_identifier(self):
        translation = translate_exception(MissingIdentifierException(["project_id"]))

        assert translation.status_code == 400
        assert translation.body == {"error": "Missing required identifier: project_id"}

    def test_timeout(self):
        translation = translate_exception(UpstreamTimeoutException("balance", 8.0))

        assert translation.status_code == 504
        assert translation.body == {"error": "Upstream timeout"}

    def test_unreachable(self):
        translation = translate_exception(UpstreamUnreachableException("balance", "refused"))

        assert translation.status_code == 502
        assert translation.body == {"error": "Upstream unreachable"}

    def test_protocol(self):
        translation = translate_exception(UpstreamProtocolException("checkout", "no url"))

        assert translation.status_code == 502
        assert translation.body == {"error": "Invalid upstream response"}

    @pytest.mark.parametrize("status", [400, 401, 402, 403, 404, 409, 500, 503])
    def test_rejected_status_passed_through(self, status):
        exc = UpstreamRejectedException("check_and_debit", status, "nope", message="Debit failed")

        translation = translate_exception(exc)

        assert translation.status_code == status
        assert translation.body == {"error": "Debit failed"}

    @pytest.mark.parametrize("status", [101, 302, 304])
    def test_non_error_rejection_is_bad_gateway(self, status):
        exc = UpstreamRejectedException("balance", status, "")

        assert translate_exception(exc).status_code == 502

    def test_details_only_when_exposed(self):
        hidden = UpstreamRejectedException("balance", 403, "forbidden project")
        shown = UpstreamRejectedException("balance", 403, "forbidden project", expose_details=True)

        assert "details" not in translate_exception(hidden).body
        assert translate_exception(shown).body["details"] == "forbidden project"

    def test_internal(self):
        translation = translate_exception(InternalGatewayException("balance"))

        assert translation.status_code == 500
        assert translation.body == {"error": "Internal error"}

    def test_unexpected_exception_has_no_detail(self):
        translation = translate_exception(KeyError("db password"))

        assert translation.status_code == 500
        assert translation.body == {"error": "Internal error"}
