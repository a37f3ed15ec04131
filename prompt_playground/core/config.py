"""
Configuration management for the prompt playground.

Provides dataclasses for all configuration options with sensible defaults,
YAML file loading, and the ConfigStore that holds the live generation
configuration.
"""

from dataclasses import dataclass, field, fields, replace
from typing import Optional, Tuple, Dict, Any, Mapping
from pathlib import Path
from enum import Enum
import os
import yaml

from ..llm.base import ConfigurationError
from ..utils.logger import get_logger

logger = get_logger(__name__)


DEFAULT_MODEL = "gemini-1.5-flash"
DEFAULT_SYSTEM_PROMPT = (
    "You are an expert product description writer. Create compelling, detailed "
    "descriptions that highlight key features and benefits."
)
DEFAULT_USER_PROMPT = "Write a product description for: {product_name}"
DEFAULT_PRODUCT_NAME = "iPhone 15 Pro"

MIN_SAMPLES = 2
MAX_SAMPLES = 12
DEFAULT_SAMPLES = 6


class ProviderName(Enum):
    """Supported generation providers."""
    GEMINI = "gemini"
    BEDROCK = "bedrock"
    MOCK = "mock"  # For testing


@dataclass(frozen=True)
class GenerationConfig:
    """
    Immutable snapshot of the settings for one generation call.

    Numeric values are not range-checked; they go to the provider as given.
    """
    model: str = DEFAULT_MODEL
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    user_prompt: str = DEFAULT_USER_PROMPT
    temperature: float = 0.7
    max_tokens: int = 150
    presence_penalty: float = 0.0
    frequency_penalty: float = 0.0
    stop_sequences: Tuple[str, ...] = ()
    product_name: str = DEFAULT_PRODUCT_NAME

    def __post_init__(self):
        if isinstance(self.stop_sequences, str):
            object.__setattr__(self, "stop_sequences", (self.stop_sequences,))
        elif not isinstance(self.stop_sequences, tuple):
            object.__setattr__(self, "stop_sequences", tuple(self.stop_sequences or ()))

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'GenerationConfig':
        """
        Create a config from a dictionary.

        Raises:
            ConfigurationError: If the dictionary has unknown keys
        """
        unknown = set(data) - set(cls.field_names())
        if unknown:
            raise ConfigurationError(f"Unknown generation settings: {sorted(unknown)}")
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'model': self.model,
            'system_prompt': self.system_prompt,
            'user_prompt': self.user_prompt,
            'temperature': self.temperature,
            'max_tokens': self.max_tokens,
            'presence_penalty': self.presence_penalty,
            'frequency_penalty': self.frequency_penalty,
            'stop_sequences': list(self.stop_sequences),
            'product_name': self.product_name,
        }


@dataclass
class PlaygroundSettings:
    """Run mode settings."""
    batched: bool = False
    sample_count: int = DEFAULT_SAMPLES
    seed: Optional[int] = None  # Seed for batched parameter sampling


@dataclass
class ProviderSettings:
    """Configuration for the generation provider."""
    name: ProviderName = ProviderName.GEMINI
    api_key: Optional[str] = None  # Never serialized; prefer GEMINI_API_KEY
    base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    timeout: int = 60  # seconds

    # AWS-specific
    aws_region: str = field(default_factory=lambda: os.getenv("AWS_REGION", "us-east-1"))
    bedrock_model: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.name, str):
            try:
                self.name = ProviderName(self.name)
            except ValueError:
                raise ConfigurationError(
                    f"Unsupported provider: {self.name}. "
                    f"Available: {[p.value for p in ProviderName]}"
                )

    def provider_kwargs(self) -> Dict[str, Any]:
        """Constructor arguments for the configured provider."""
        if self.name is ProviderName.GEMINI:
            return {
                'api_key': self.api_key,
                'base_url': self.base_url,
                'timeout': self.timeout,
            }
        if self.name is ProviderName.BEDROCK:
            return {
                'model_id': self.bedrock_model,
                'region': self.aws_region,
                'timeout': self.timeout,
            }
        return {}


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    level: str = "INFO"
    format: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    file: Optional[Path] = None

    def __post_init__(self):
        if self.file and isinstance(self.file, str):
            self.file = Path(self.file)


@dataclass
class AppConfig:
    """
    Root configuration object containing all settings.

    Can be loaded from YAML file or constructed programmatically.
    """
    generation: GenerationConfig = field(default_factory=GenerationConfig)
    playground: PlaygroundSettings = field(default_factory=PlaygroundSettings)
    provider: ProviderSettings = field(default_factory=ProviderSettings)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, path: Path | str) -> 'AppConfig':
        """
        Load configuration from a YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigurationError: If config file is invalid
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, 'r') as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file must contain a mapping: {path}")

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AppConfig':
        """
        Create configuration from a dictionary.

        Args:
            data: Configuration dictionary

        Returns:
            AppConfig instance
        """
        try:
            return cls(
                generation=GenerationConfig.from_dict(data.get('generation') or {}),
                playground=PlaygroundSettings(**(data.get('playground') or {})),
                provider=ProviderSettings(**(data.get('provider') or {})),
                logging=LoggingConfig(**(data.get('logging') or {})),
            )
        except TypeError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert configuration to a dictionary.

        The provider API key is left out.

        Returns:
            Configuration as dictionary
        """
        return {
            'generation': self.generation.to_dict(),
            'playground': {
                'batched': self.playground.batched,
                'sample_count': self.playground.sample_count,
                'seed': self.playground.seed,
            },
            'provider': {
                'name': self.provider.name.value,
                'base_url': self.provider.base_url,
                'timeout': self.provider.timeout,
                'aws_region': self.provider.aws_region,
                'bedrock_model': self.provider.bedrock_model,
            },
            'logging': {
                'level': self.logging.level,
                'format': self.logging.format,
                'file': str(self.logging.file) if self.logging.file else None,
            },
        }

    def save_yaml(self, path: Path | str) -> None:
        """
        Save configuration to a YAML file.

        Args:
            path: Path to output YAML file
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)


class ConfigStore:
    """
    Holds the current generation configuration.

    ``update`` merges the given fields over the current snapshot. Values
    are not validated here.
    """

    def __init__(self, config: Optional[GenerationConfig] = None):
        self._config = config or GenerationConfig()

    def get(self) -> GenerationConfig:
        """Return the current configuration snapshot."""
        return self._config

    def update(self, updates: Optional[Mapping[str, Any]] = None, **changes) -> GenerationConfig:
        """
        Merge a partial update into the configuration.

        Args:
            updates: Mapping of field names to new values
            **changes: Field values given as keywords

        Returns:
            The new configuration snapshot

        Raises:
            ConfigurationError: If a field name is unknown
        """
        merged = dict(updates or {})
        merged.update(changes)

        unknown = set(merged) - set(GenerationConfig.field_names())
        if unknown:
            raise ConfigurationError(f"Unknown generation settings: {sorted(unknown)}")

        self._config = replace(self._config, **merged)
        logger.debug(f"Config updated: {sorted(merged)}")
        return self._config


def get_default_config() -> AppConfig:
    """
    Get the default application configuration.

    Returns:
        AppConfig with all default values
    """
    return AppConfig()


def load_config(config_path: Optional[Path | str] = None) -> AppConfig:
    """
    Load configuration from file or return defaults.

    Looks for config in this order:
    1. Provided path
    2. ./config/playground.yaml
    3. ./playground.yaml
    4. ~/.prompt-playground/config.yaml
    5. Default values

    Args:
        config_path: Optional path to config file

    Returns:
        AppConfig instance
    """
    if config_path:
        return AppConfig.from_yaml(config_path)

    default_paths = [
        Path("config/playground.yaml"),
        Path("playground.yaml"),
        Path.home() / ".prompt-playground" / "config.yaml",
    ]

    for path in default_paths:
        if path.exists():
            logger.debug(f"Loading config from {path}")
            return AppConfig.from_yaml(path)

    return get_default_config()
