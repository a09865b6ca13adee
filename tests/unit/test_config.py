"""Unit tests for config.py and lexio/dependencies.py wiring."""

import pytest

import config
from config import Settings, get_settings, reset_settings, validate_required_settings
from lexio import dependencies
from shared.utils.exceptions import ServiceNotConfiguredException


@pytest.fixture(autouse=True)
def fresh_settings():
    reset_settings()
    dependencies.reset_dependencies()
    yield
    reset_settings()
    dependencies.reset_dependencies()


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("LLM_MODEL", raising=False)
        settings = Settings(_env_file=None)
        assert settings.api_port == 8080
        assert settings.llm_model == "gpt-4o-mini"
        assert settings.max_questions_per_exercise == 10
        assert settings.default_question_count == 5
        assert settings.chat_max_messages == 50
        assert settings.max_tool_rounds == 8

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("LLM_MODEL", "gpt-4o")
        monkeypatch.setenv("MAX_QUESTIONS_PER_EXERCISE", "7")
        settings = Settings(_env_file=None)
        assert settings.llm_model == "gpt-4o"
        assert settings.max_questions_per_exercise == 7

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_reset_settings(self):
        first = get_settings()
        reset_settings()
        assert get_settings() is not first


class TestValidateRequiredSettings:
    def test_passes_with_key(self, monkeypatch):
        monkeypatch.setattr(config, "_settings", Settings(openai_api_key="sk-test", _env_file=None))
        assert validate_required_settings() is True

    def test_missing_key(self, monkeypatch):
        monkeypatch.setattr(config, "_settings", Settings(openai_api_key="", _env_file=None))
        with pytest.raises(ValueError, match="OPENAI_API_KEY"):
            validate_required_settings()

    def test_invalid_max_questions(self, monkeypatch):
        monkeypatch.setattr(
            config, "_settings",
            Settings(openai_api_key="sk-test", max_questions_per_exercise=0, _env_file=None),
        )
        with pytest.raises(ValueError, match="MAX_QUESTIONS_PER_EXERCISE"):
            validate_required_settings()


class TestDependencies:
    def test_missing_key_raises_not_configured(self, monkeypatch):
        monkeypatch.setattr(config, "_settings", Settings(openai_api_key="", _env_file=None))
        with pytest.raises(ServiceNotConfiguredException):
            dependencies.get_llm_service()

    def test_shared_instances(self, monkeypatch):
        monkeypatch.setattr(
            config, "_settings",
            Settings(openai_api_key="sk-test", max_questions_per_exercise=6, _env_file=None),
        )
        orchestrator = dependencies.get_orchestrator()
        assistant = dependencies.get_assistant()

        assert dependencies.get_orchestrator() is orchestrator
        assert assistant.tools.orchestrator is orchestrator
        assert orchestrator.max_questions == 6
        assert assistant.llm is dependencies.get_llm_service()
