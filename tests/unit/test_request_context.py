"""Unit tests for correlation ID selection."""

import pytest

from src.presentation.middleware.request_context import choose_request_id


class TestChooseRequestId:

    def test_well_formed_caller_id_reused(self):
        assert choose_request_id("req-123_abc.def:9") == "req-123_abc.def:9"

    @pytest.mark.parametrize("inbound", [None, "", "has space", "x" * 129, "a\nb"])
    def test_unusable_id_replaced(self, inbound):
        request_id = choose_request_id(inbound)

        assert request_id != inbound
        assert len(request_id) == 32
