"""Unit tests for parent base address resolution."""

import pytest
from pydantic import ValidationError

from src.core.config import (
    DEFAULT_PARENT_BASE_URL,
    GatewayConfig,
    Settings,
    resolve_parent_base_url,
    tidy_base_url,
    validate_path_overrides,
)

PARENT_ENV_VARS = ("PARENT_API_BASE", "NEXT_PUBLIC_PARENT_API_BASE", "PARENT_BASE_URL")


@pytest.fixture
def clean_env(monkeypatch):
    for name in PARENT_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestTidyBaseUrl:

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("https://parent.example", "https://parent.example"),
            ("https://parent.example/", "https://parent.example"),
            ("https://parent.example/api", "https://parent.example"),
            ("https://parent.example/api/", "https://parent.example"),
            ("  https://parent.example//  ", "https://parent.example"),
        ],
    )
    def test_tidy(self, raw, expected):
        assert tidy_base_url(raw) == expected

    def test_api_inside_host_untouched(self):
        assert tidy_base_url("https://api.example") == "https://api.example"


class TestResolveParentBaseUrl:

    def test_first_non_empty_wins(self):
        url, configured = resolve_parent_base_url(
            [None, "https://second.example/", "https://third.example"]
        )

        assert url == "https://second.example"
        assert configured is True

    def test_blank_candidates_skipped(self):
        url, _ = resolve_parent_base_url(["  ", "", "https://third.example"])

        assert url == "https://third.example"

    def test_default_when_nothing_configured(self):
        url, configured = resolve_parent_base_url([None, None, None])

        assert url == DEFAULT_PARENT_BASE_URL
        assert configured is False


class TestGatewayConfigFromSettings:

    def test_precedence_order(self, clean_env):
        clean_env.setenv("PARENT_BASE_URL", "https://third.example")
        clean_env.setenv("NEXT_PUBLIC_PARENT_API_BASE", "https://second.example")
        clean_env.setenv("PARENT_API_BASE", "https://first.example/api")

        config = GatewayConfig.from_settings(Settings(_env_file=None))

        assert config.base_url == "https://first.example"
        assert config.base_url_configured is True

    def test_defaults(self, clean_env):
        clean_env.delenv("UPSTREAM_TIMEOUT_SECONDS", raising=False)
        clean_env.delenv("EXPOSE_UPSTREAM_ERRORS", raising=False)

        config = GatewayConfig.from_settings(Settings(_env_file=None))

        assert config.base_url == DEFAULT_PARENT_BASE_URL
        assert config.base_url_configured is False
        assert config.timeout_seconds == 8.0
        assert config.expose_upstream_errors is False

    def test_path_overrides_from_json_env(self, clean_env):
        clean_env.setenv("UPSTREAM_PATH_OVERRIDES", '{"balance": "/api/credits/balance-read"}')

        config = GatewayConfig.from_settings(Settings(_env_file=None))

        assert config.path_overrides == {"balance": "/api/credits/balance-read"}


class TestPathOverrideValidation:

    def test_known_operations_accepted(self):
        overrides = {"balance": "/api/credits/balance-read", "check_and_debit": "/api/debit"}

        assert validate_path_overrides(overrides) == overrides

    def test_unknown_operation_named_in_error(self):
        with pytest.raises(ValueError) as exc_info:
            validate_path_overrides({"balance_read": "/api/credits/balance-read"})

        message = str(exc_info.value)
        assert "balance_read" in message
        assert "check_and_debit" in message

    def test_empty_path_rejected(self):
        with pytest.raises(ValueError, match="checkout"):
            validate_path_overrides({"checkout": "  "})

    def test_settings_reject_misspelled_operation_from_env(self, clean_env):
        clean_env.setenv("UPSTREAM_PATH_OVERRIDES", '{"balance_read": "/api/credits/balance-read"}')

        with pytest.raises(ValidationError, match="balance_read"):
            Settings(_env_file=None)

    def test_gateway_config_rejects_unknown_operation(self):
        with pytest.raises(ValueError, match="balance_read"):
            GatewayConfig(
                base_url="http://parent.test",
                path_overrides={"balance_read": "/api/credits/balance-read"},
            )
