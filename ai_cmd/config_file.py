"""
Config file support for AI Cmd.

Reads ~/.config/ai-cmd/config.toml if it exists and returns an immutable
Settings value. Missing config or invalid values fall back to defaults.
"""

import logging
import sys
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from .history import DEFAULT_HISTORY_FILE, DEFAULT_MAX_HISTORY
from .llm import config as llm_config
from .llm.types import ProviderConfig

logger = logging.getLogger(__name__)

CONFIG_PATH = Path.home() / ".config" / "ai-cmd" / "config.toml"

# Defaults for the flat settings; provider defaults live in llm.config
DEFAULTS: Dict[str, Any] = {
    "provider": llm_config.DEFAULT_PROVIDER,
    "max_tokens": llm_config.DEFAULT_MAX_TOKENS,
    "temperature": llm_config.DEFAULT_TEMPERATURE,
    "history_file": DEFAULT_HISTORY_FILE,
    "max_history": DEFAULT_MAX_HISTORY,
    "timeout": llm_config.HTTP_TIMEOUT,
    "debug": False,
}


@dataclass(frozen=True)
class Settings:
    provider: str = DEFAULTS["provider"]
    providers: Mapping[str, ProviderConfig] = field(default_factory=lambda: default_providers())
    max_tokens: int = DEFAULTS["max_tokens"]
    temperature: float = DEFAULTS["temperature"]
    history_file: Path = DEFAULTS["history_file"]
    max_history: int = DEFAULTS["max_history"]
    timeout: int = DEFAULTS["timeout"]
    debug: bool = DEFAULTS["debug"]

    def provider_config(self, name: str) -> ProviderConfig:
        """Settings for one provider; unknown names get an empty config."""
        return self.providers.get(name) or ProviderConfig(api_url="", model="")


def default_providers(api_keys: Optional[Mapping[str, str]] = None) -> Mapping[str, ProviderConfig]:
    api_keys = api_keys or {}
    return MappingProxyType({
        name: ProviderConfig(
            api_url=llm_config.DEFAULT_API_URLS[name],
            model=llm_config.DEFAULT_MODELS[name],
            api_key=api_keys.get(name),
        )
        for name in llm_config.DEFAULT_API_URLS
    })


def _warn(message: str) -> None:
    print(f"ai-cmd: {message}", file=sys.stderr)


def _validate_int(value: Any, key: str, minimum: int = 1) -> int | None:
    """Validate an integer config value. Returns None if invalid."""
    if isinstance(value, bool):
        _warn(f"config '{key}' must be an integer, ignoring")
        return None
    try:
        val = int(value)
        if val < minimum:
            _warn(f"config '{key}' must be >= {minimum}, ignoring")
            return None
        return val
    except (TypeError, ValueError):
        _warn(f"config '{key}' must be an integer, ignoring")
        return None


def _validate_temperature(value: Any) -> float | None:
    if isinstance(value, bool):
        _warn("config 'temperature' must be a number, ignoring")
        return None
    try:
        val = float(value)
    except (TypeError, ValueError):
        _warn("config 'temperature' must be a number, ignoring")
        return None
    if not 0.0 <= val <= 1.0:
        _warn("config 'temperature' must be between 0 and 1, ignoring")
        return None
    return val


def _validate_str(value: Any, key: str) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    _warn(f"config '{key}' must be a non-empty string, ignoring")
    return None


def _provider_settings(data: Dict[str, Any]) -> Dict[str, ProviderConfig]:
    """Merge [providers.<name>] tables over defaults and environment keys."""
    section = data.get("providers", {})
    if not isinstance(section, dict):
        _warn("config 'providers' must be a table, ignoring")
        section = {}

    names = list(llm_config.DEFAULT_API_URLS)
    names += [name for name in section if name not in names]

    providers = {}
    for name in names:
        overrides = section.get(name, {})
        if not isinstance(overrides, dict):
            _warn(f"config 'providers.{name}' must be a table, ignoring")
            overrides = {}

        api_url = llm_config.DEFAULT_API_URLS.get(name, "")
        model = llm_config.DEFAULT_MODELS.get(name, "")
        api_key = llm_config.api_key_from_env(name)

        if overrides.get("api_url") is not None:
            api_url = _validate_str(overrides["api_url"], f"providers.{name}.api_url") or api_url
        if overrides.get("model") is not None:
            model = _validate_str(overrides["model"], f"providers.{name}.model") or model
        if overrides.get("api_key") is not None:
            api_key = _validate_str(overrides["api_key"], f"providers.{name}.api_key") or api_key

        providers[name] = ProviderConfig(api_url=api_url, model=model, api_key=api_key)
    return providers


def load_config(path: Optional[Path] = None) -> Settings:
    """
    Load config from TOML file, merging with defaults.

    Environment variables (and a .env file) supply API keys that the file
    does not set.
    """
    path = path or CONFIG_PATH
    llm_config.load_env()

    values = dict(DEFAULTS)
    data: Dict[str, Any] = {}

    if not path.exists():
        logger.debug("No config file at %s, using defaults", path)
    else:
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except Exception as e:
            _warn(f"error reading config: {e}")
            data = {}

    provider = data.get("provider")
    if provider is not None:
        val = _validate_str(provider, "provider")
        if val is not None:
            if val not in llm_config.DEFAULT_API_URLS:
                logger.warning("Provider '%s' is not supported", val)
            values["provider"] = val

    if data.get("max_tokens") is not None:
        val = _validate_int(data["max_tokens"], "max_tokens")
        if val is not None:
            values["max_tokens"] = val

    if data.get("temperature") is not None:
        val = _validate_temperature(data["temperature"])
        if val is not None:
            values["temperature"] = val

    # [history] section
    history_section = data.get("history", {})
    if isinstance(history_section, dict):
        history_file = history_section.get("file")
        if history_file is not None:
            val = _validate_str(history_file, "history.file")
            if val is not None:
                values["history_file"] = Path(val).expanduser()

        max_entries = history_section.get("max_entries")
        if max_entries is not None:
            val = _validate_int(max_entries, "history.max_entries")
            if val is not None:
                values["max_history"] = val

    # [transport] section
    transport_section = data.get("transport", {})
    if isinstance(transport_section, dict):
        timeout = transport_section.get("timeout")
        if timeout is not None:
            val = _validate_int(timeout, "transport.timeout")
            if val is not None:
                values["timeout"] = val

    # [debug] section
    debug_section = data.get("debug", {})
    if isinstance(debug_section, dict):
        enabled = debug_section.get("enabled")
        if isinstance(enabled, bool):
            values["debug"] = enabled

    settings = Settings(providers=MappingProxyType(_provider_settings(data)), **values)
    logger.debug("Loaded config: %s", settings)
    return settings
