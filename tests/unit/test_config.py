"""Unit tests for configuration and the config store."""

import pytest
from prompt_playground.core.config import (
    AppConfig,
    ConfigStore,
    GenerationConfig,
    LoggingConfig,
    PlaygroundSettings,
    ProviderName,
    ProviderSettings,
    load_config,
)
from prompt_playground.llm.base import ConfigurationError


class TestGenerationConfig:
    """Tests for GenerationConfig."""

    def test_defaults(self):
        config = GenerationConfig()
        assert config.model == "gemini-1.5-flash"
        assert config.temperature == 0.7
        assert config.max_tokens == 150
        assert config.stop_sequences == ()
        assert "{product_name}" in config.user_prompt
        assert config.product_name == "iPhone 15 Pro"

    def test_is_immutable(self):
        config = GenerationConfig()
        with pytest.raises(AttributeError):
            config.temperature = 1.0

    def test_stop_sequences_list_becomes_tuple(self):
        config = GenerationConfig(stop_sequences=["END", "###"])
        assert config.stop_sequences == ("END", "###")

    def test_single_string_stop_sequence_is_not_split(self):
        assert GenerationConfig(stop_sequences="END").stop_sequences == ("END",)

    def test_out_of_range_values_are_kept(self):
        config = GenerationConfig(temperature=5.0, max_tokens=-3, presence_penalty=9.9)
        assert config.temperature == 5.0
        assert config.max_tokens == -3
        assert config.presence_penalty == 9.9

    def test_from_dict_rejects_unknown_keys(self):
        with pytest.raises(ConfigurationError):
            GenerationConfig.from_dict({"temprature": 0.1})

    def test_to_dict_from_dict(self):
        config = GenerationConfig(product_name="Tesla Model S", stop_sequences=("END",))
        assert GenerationConfig.from_dict(config.to_dict()) == config


class TestConfigStore:
    """Tests for ConfigStore merge updates."""

    @pytest.fixture
    def store(self):
        return ConfigStore()

    def test_get_returns_current(self, store):
        assert store.get() == GenerationConfig()

    def test_update_keeps_unspecified_fields(self, store):
        before = store.get()
        store.update(temperature=1.3)
        after = store.get()

        assert after.temperature == 1.3
        assert after.model == before.model
        assert after.system_prompt == before.system_prompt
        assert after.max_tokens == before.max_tokens
        assert after.product_name == before.product_name

    def test_update_with_mapping(self, store):
        store.update({"product_name": "Nike Air Jordan", "max_tokens": 300})
        assert store.get().product_name == "Nike Air Jordan"
        assert store.get().max_tokens == 300

    def test_update_does_not_mutate_previous_snapshot(self, store):
        snapshot = store.get()
        store.update(temperature=0.1)
        assert snapshot.temperature == 0.7

    def test_update_does_not_validate_values(self, store):
        store.update(temperature=-4.0, max_tokens=100000)
        assert store.get().temperature == -4.0
        assert store.get().max_tokens == 100000

    def test_update_with_string_stop_sequence(self, store):
        store.update(stop_sequences="END")
        assert store.get().stop_sequences == ("END",)

    def test_update_unknown_field(self, store):
        with pytest.raises(ConfigurationError):
            store.update(colour="blue")

    def test_empty_update_is_noop(self, store):
        before = store.get()
        store.update()
        assert store.get() == before


class TestProviderSettings:
    """Tests for ProviderSettings."""

    def test_string_name_coerced(self):
        settings = ProviderSettings(name="mock")
        assert settings.name is ProviderName.MOCK

    def test_unknown_name(self):
        with pytest.raises(ConfigurationError):
            ProviderSettings(name="nope")

    def test_gemini_kwargs(self):
        settings = ProviderSettings(api_key="k", timeout=5)
        kwargs = settings.provider_kwargs()
        assert kwargs["api_key"] == "k"
        assert kwargs["timeout"] == 5

    def test_bedrock_kwargs(self):
        settings = ProviderSettings(name="bedrock", bedrock_model="m", aws_region="eu-west-1")
        assert settings.provider_kwargs() == {"model_id": "m", "region": "eu-west-1", "timeout": 60}

    def test_mock_kwargs(self):
        assert ProviderSettings(name="mock").provider_kwargs() == {}


class TestAppConfig:
    """Tests for AppConfig loading and saving."""

    def test_from_dict(self):
        config = AppConfig.from_dict({
            "generation": {"temperature": 0.2, "stop_sequences": ["END"]},
            "playground": {"batched": True, "sample_count": 4, "seed": 3},
            "provider": {"name": "mock"},
            "logging": {"level": "DEBUG", "file": "logs/run.log"},
        })
        assert config.generation.temperature == 0.2
        assert config.generation.stop_sequences == ("END",)
        assert config.playground == PlaygroundSettings(batched=True, sample_count=4, seed=3)
        assert config.provider.name is ProviderName.MOCK
        assert config.logging.level == "DEBUG"
        assert str(config.logging.file) == "logs/run.log"

    def test_from_dict_invalid_section_key(self):
        with pytest.raises(ConfigurationError):
            AppConfig.from_dict({"playground": {"samples": 3}})

    def test_to_dict_omits_api_key(self):
        config = AppConfig(provider=ProviderSettings(api_key="secret"))
        assert "api_key" not in config.to_dict()["provider"]
        assert "secret" not in str(config.to_dict())

    def test_yaml_round_trip(self, tmp_path):
        config = AppConfig(
            generation=GenerationConfig(product_name="Dyson V15 Detect", stop_sequences=("END",)),
            playground=PlaygroundSettings(batched=True, sample_count=8),
            logging=LoggingConfig(level="WARNING"),
        )
        path = tmp_path / "nested" / "playground.yaml"
        config.save_yaml(path)

        loaded = AppConfig.from_yaml(path)
        assert loaded.generation == config.generation
        assert loaded.playground.sample_count == 8
        assert loaded.logging.level == "WARNING"

    def test_from_yaml_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AppConfig.from_yaml(tmp_path / "missing.yaml")

    def test_from_yaml_non_mapping(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigurationError):
            AppConfig.from_yaml(path)

    def test_yaml_scalar_stop_sequence(self, tmp_path):
        path = tmp_path / "scalar.yaml"
        path.write_text("generation:\n  stop_sequences: END\n")
        assert AppConfig.from_yaml(path).generation.stop_sequences == ("END",)

    def test_empty_yaml_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert AppConfig.from_yaml(path).generation == GenerationConfig()


class TestLoadConfig:
    """Tests for load_config lookup."""

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text("generation:\n  max_tokens: 42\n")
        assert load_config(path).generation.max_tokens == 42

    def test_defaults_when_nothing_found(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert load_config().generation == GenerationConfig()

    def test_finds_local_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "playground.yaml").write_text("playground:\n  batched: true\n")
        assert load_config().playground.batched is True
