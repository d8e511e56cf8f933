"""Configuration management for the authorship detector."""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from .utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_API_URL = "https://openrouter.ai/api/v1/chat/completions"
DEFAULT_MODEL = "google/gemini-2.5-flash-preview-05-20"
DEFAULT_APP_TITLE = "AI Authorship Verification"


@dataclass(frozen=True)
class LLMProviderConfig:
    """Configuration for a specific LLM provider."""
    api_key: str = ""
    base_url: str = ""
    model: str = ""
    max_tokens: int = 1000
    temperature: float = 0.4
    timeout: int = 60


@dataclass(frozen=True)
class LLMConfig:
    """Provider selection and retry policy."""
    provider: str = "openrouter"
    providers: Dict[str, LLMProviderConfig] = field(default_factory=dict)
    max_retries: int = 5
    base_delay: float = 2.0
    max_delay: float = 60.0

    def get_provider_config(self, provider_name: Optional[str] = None) -> LLMProviderConfig:
        """Get configuration for a specific provider."""
        name = provider_name or self.provider
        if name not in self.providers:
            raise ValueError(f"Unknown LLM provider: {name}")
        return self.providers[name]

    def retry_config(self) -> Dict[str, float]:
        return {
            "max_retries": self.max_retries,
            "base_delay": self.base_delay,
            "max_delay": self.max_delay,
        }


@dataclass(frozen=True)
class DetectorConfig:
    """Attribution sent with every request."""
    site_url: str = "http://localhost"
    app_title: str = DEFAULT_APP_TITLE


@dataclass(frozen=True)
class Config:
    """Main configuration container."""
    llm: LLMConfig = field(default_factory=LLMConfig)
    detector: DetectorConfig = field(default_factory=DetectorConfig)
    log_level: str = "INFO"
    log_json: bool = False


def _resolve_env_vars(value: Any) -> Any:
    """Resolve ``${VAR}`` strings from the environment."""
    if isinstance(value, str) and value.startswith("${") and value.endswith("}"):
        env_var = value[2:-1]
        resolved = os.environ.get(env_var, "")
        if not resolved:
            logger.warning(f"Environment variable {env_var} not set")
        return resolved
    elif isinstance(value, dict):
        return {k: _resolve_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_resolve_env_vars(v) for v in value]
    return value


def _parse_llm_provider_config(data: Dict) -> LLMProviderConfig:
    return LLMProviderConfig(
        api_key=_resolve_env_vars(data.get("api_key", "")),
        base_url=data.get("base_url", ""),
        model=data.get("model", ""),
        max_tokens=data.get("max_tokens", 1000),
        temperature=data.get("temperature", 0.4),
        timeout=data.get("timeout", 60),
    )


def _parse_llm_config(data: Dict) -> LLMConfig:
    providers = {
        name: _parse_llm_provider_config(provider_data)
        for name, provider_data in data.get("providers", {}).items()
    }

    retry_config = data.get("retry", {})

    return LLMConfig(
        provider=data.get("provider", "openrouter"),
        providers=providers,
        max_retries=retry_config.get("max_attempts", 5),
        base_delay=retry_config.get("base_delay", 2.0),
        max_delay=retry_config.get("max_delay", 60.0),
    )


def parse_config(data: Dict) -> Config:
    """Build a Config from an already-loaded dict."""
    llm = _parse_llm_config(data["llm"]) if "llm" in data else default_llm_config()

    detector_data = data.get("detector", {})
    detector = DetectorConfig(
        site_url=detector_data.get("site_url", "http://localhost"),
        app_title=detector_data.get("app_title", DEFAULT_APP_TITLE),
    )

    return Config(
        llm=llm,
        detector=detector,
        log_level=data.get("log_level", "INFO"),
        log_json=data.get("log_json", False),
    )


def load_config(config_path: str = "config.json") -> Config:
    """Load configuration from a JSON file.

    Args:
        config_path: Path to the configuration file.

    Returns:
        Parsed configuration object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config file is invalid.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(
            f"Configuration file not found: {config_path}\n"
            "Please copy config.json.sample to config.json and configure it."
        )

    try:
        with open(path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file: {e}")

    config = parse_config(data)
    logger.info(f"Loaded configuration from {config_path}")
    return config


def default_llm_config(api_key: str = "") -> LLMConfig:
    """OpenRouter settings used when no config file is given."""
    return LLMConfig(
        provider="openrouter",
        providers={
            "openrouter": LLMProviderConfig(
                api_key=api_key,
                base_url=DEFAULT_API_URL,
                model=DEFAULT_MODEL,
            )
        },
    )


def create_default_config() -> Dict:
    """Create a default configuration dictionary."""
    return {
        "llm": {
            "provider": "openrouter",
            "providers": {
                "openrouter": {
                    "api_key": "${OPENROUTER_API_KEY}",
                    "base_url": DEFAULT_API_URL,
                    "model": DEFAULT_MODEL,
                    "max_tokens": 1000,
                    "temperature": 0.4,
                    "timeout": 60
                }
            },
            "retry": {
                "max_attempts": 5,
                "base_delay": 2,
                "max_delay": 60
            }
        },
        "detector": {
            "site_url": "http://localhost",
            "app_title": DEFAULT_APP_TITLE
        },
        "log_level": "INFO",
        "log_json": False
    }
