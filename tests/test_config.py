"""Unit tests for configuration loading and validation."""

import pytest

from app.config import (
    AdvancedConfig,
    AppConfig,
    ConfigurationError,
    MatchingConfig,
    MatchReasonRule,
    SourceConfig,
    load_config,
    load_environment_config,
    validate_config_file,
)
from app.config.validators import check_for_warnings

ENV_VARS = ["LOG_LEVEL", "LOG_FORMAT", "ENVIRONMENT", "GREENHOUSE_API_BASE_URL"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Run each test from an empty directory with no config variables set."""
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def valid_config_yaml():
    return """
sources:
  - name: Stripe
    identifier: stripe
  - name: Adyen
    identifier: adyen
    type: greenhouse
    enabled: false

matching:
  role_keywords: ["marketing", "brand"]
  country_keywords:
    uk: ["London", "United Kingdom"]
    nl: ["Amsterdam"]
  summary_length: 120

logging:
  level: DEBUG
  format: json

advanced:
  http_request_timeout: 15
  cache_ttl_seconds: 600
"""


# ============================================================================
# Models
# ============================================================================


class TestSourceConfig:
    def test_defaults(self):
        source = SourceConfig(name=" Stripe ", identifier=" stripe ")

        assert source.name == "Stripe"
        assert source.identifier == "stripe"
        assert source.type == "greenhouse"
        assert str(source.type) == "greenhouse"
        assert source.enabled is True

    def test_rejects_blank_identifier(self):
        with pytest.raises(ValueError):
            SourceConfig(name="Stripe", identifier="   ")

    def test_rejects_unknown_type(self):
        with pytest.raises(ValueError):
            SourceConfig(name="Stripe", identifier="stripe", type="workday")


class TestAppConfig:
    def test_default_boards(self):
        config = AppConfig()

        assert [(s.identifier, s.name) for s in config.sources] == [
            ("stripe", "Stripe"),
            ("intercom", "Intercom"),
            ("adyen", "Adyen"),
            ("bolcom", "bol.com"),
            ("tripadvisor", "Tripadvisor"),
        ]
        assert config.advanced.cache_ttl_seconds == 1800
        assert config.advanced.api_base_url == "https://boards-api.greenhouse.io/v1"

    def test_default_enums_stored_as_plain_values(self):
        config = AppConfig()

        assert {str(s.type) for s in config.sources} == {"greenhouse"}
        assert str(config.logging.level) == "INFO"
        assert str(config.logging.format) == "key-value"

    def test_duplicate_sources_rejected(self):
        with pytest.raises(ValueError, match="Duplicate source"):
            AppConfig(
                sources=[
                    SourceConfig(name="A", identifier="stripe"),
                    SourceConfig(name="B", identifier="stripe"),
                ]
            )

    def test_enabled_sources(self):
        config = AppConfig(
            sources=[
                SourceConfig(name="A", identifier="a"),
                SourceConfig(name="B", identifier="b", enabled=False),
            ]
        )

        assert [s.identifier for s in config.get_enabled_sources()] == ["a"]


class TestMatchingConfig:
    def test_country_keywords_normalized(self):
        config = MatchingConfig(country_keywords={" ie ": ["Dublin", " ", "CORK"]})

        assert config.country_keywords == {"IE": ["dublin", "cork"]}

    def test_country_without_keywords_rejected(self):
        with pytest.raises(ValueError, match="at least one keyword"):
            MatchingConfig(country_keywords={"IE": []})

    def test_invalid_role_pattern_rejected(self):
        with pytest.raises(ValueError, match="Invalid role keyword pattern"):
            MatchingConfig(role_keywords=["market("])

    def test_visa_keywords_normalized(self):
        assert MatchingConfig(visa_keywords=[" Visa ", ""]).visa_keywords == ["visa"]

    def test_invalid_reason_pattern_rejected(self):
        with pytest.raises(ValueError, match="Invalid regular expression"):
            MatchReasonRule(pattern="[unclosed", reason="x")

    def test_default_rule_order(self):
        rules = MatchingConfig().match_reason_rules

        assert rules[0].pattern == "wordpress|cms"
        assert len(rules) == 7


class TestAdvancedConfig:
    def test_timeout_bounds(self):
        with pytest.raises(ValueError):
            AdvancedConfig(http_request_timeout=4)

    def test_base_url_trailing_slash_stripped(self):
        assert AdvancedConfig(api_base_url="http://x/v1/").api_base_url == "http://x/v1"


# ============================================================================
# Loader
# ============================================================================


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults_without_file(self):
        app_config, env_config = load_config()

        assert len(app_config.sources) == 5
        assert env_config.environment == "local"
        assert env_config.log_level is None

    def test_explicit_file(self, tmp_path, valid_config_yaml):
        config_file = tmp_path / "custom.yaml"
        config_file.write_text(valid_config_yaml)

        with pytest.warns(UserWarning, match="disabled"):
            app_config, _ = load_config(config_file)

        assert [s.identifier for s in app_config.get_enabled_sources()] == ["stripe"]
        assert app_config.matching.country_keywords == {
            "UK": ["london", "united kingdom"],
            "NL": ["amsterdam"],
        }
        assert app_config.matching.summary_length == 120
        assert app_config.logging.level == "DEBUG"
        assert app_config.logging.format == "json"
        assert app_config.advanced.http_request_timeout == 15

    def test_discovers_config_yaml_in_cwd(self, tmp_path):
        (tmp_path / "config.yaml").write_text("sources:\n  - {name: Solo, identifier: solo}\n")

        app_config, _ = load_config()

        assert [s.identifier for s in app_config.sources] == ["solo"]

    def test_discovers_config_directory(self, tmp_path):
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "config.yaml").write_text(
            "sources:\n  - {name: Nested, identifier: nested}\n"
        )

        app_config, _ = load_config()

        assert app_config.sources[0].identifier == "nested"

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(tmp_path / "nope.yaml")

    def test_empty_file_uses_defaults(self, tmp_path):
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")

        app_config, _ = load_config(config_file)

        assert len(app_config.sources) == 5

    def test_invalid_yaml(self, tmp_path):
        config_file = tmp_path / "bad.yaml"
        config_file.write_text("sources: [unclosed\n")

        with pytest.raises(ConfigurationError, match="Failed to parse YAML"):
            load_config(config_file)

    def test_non_mapping_top_level(self, tmp_path):
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- just\n- a list\n")

        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(config_file)

    def test_validation_errors_collected(self, tmp_path):
        config_file = tmp_path / "invalid.yaml"
        config_file.write_text("sources:\n  - name: NoIdentifier\nadvanced:\n  http_request_timeout: 1\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(config_file)

        errors = exc_info.value.errors
        assert any("Missing required field: sources -> 0 -> identifier" in e for e in errors)
        assert any("http_request_timeout" in e for e in errors)
        assert "Suggestions:" in str(exc_info.value)

    def test_env_overrides_api_base_url(self, monkeypatch):
        monkeypatch.setenv("GREENHOUSE_API_BASE_URL", "http://localhost:9000/v1/")

        app_config, env_config = load_config()

        assert env_config.api_base_url == "http://localhost:9000/v1"
        assert app_config.advanced.api_base_url == "http://localhost:9000/v1"


class TestEnvironmentConfig:
    def test_values_normalized(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("LOG_FORMAT", "JSON")
        monkeypatch.setenv("ENVIRONMENT", "production")

        env_config = load_environment_config()

        assert env_config.log_level == "DEBUG"
        assert env_config.log_format == "json"
        assert env_config.environment == "production"

    def test_invalid_values_reported_together(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "LOUD")
        monkeypatch.setenv("LOG_FORMAT", "xml")
        monkeypatch.setenv("GREENHOUSE_API_BASE_URL", "ftp://mirror")

        with pytest.raises(ConfigurationError) as exc_info:
            load_environment_config()

        assert len(exc_info.value.errors) == 3


class TestWarnings:
    def test_no_warnings_for_clean_config(self):
        assert check_for_warnings({"sources": [{"name": "A", "identifier": "a"}]}) == []

    def test_collects_warnings(self):
        warnings = check_for_warnings(
            {
                "sources": [],
                "advanced": {"max_jobs_per_source": 10000, "cache_ttl_seconds": 0},
                "matching": {
                    "role_keywords": [],
                    "country_keywords": {"UK": ["london"], "IE": ["London"]},
                },
            }
        )

        assert len(warnings) == 5
        assert any("No sources configured" in w for w in warnings)
        assert any("'london' is listed for both UK and IE" in w for w in warnings)


class TestValidateConfigFile:
    def test_valid(self, tmp_path, valid_config_yaml, capsys):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(valid_config_yaml)

        assert validate_config_file(config_file) is True
        assert "is valid" in capsys.readouterr().out

    def test_invalid(self, tmp_path, capsys):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("advanced:\n  cache_ttl_seconds: -1\n")

        assert validate_config_file(config_file) is False
        assert "validation failed" in capsys.readouterr().out


class TestConfigurationError:
    def test_render(self):
        error = ConfigurationError("Broken", errors=["one", "two"], suggestions=["fix it"])

        rendered = str(error)
        assert rendered.startswith("Broken")
        assert "  1. one" in rendered
        assert "  2. two" in rendered
        assert "  - fix it" in rendered
