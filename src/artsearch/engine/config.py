from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml
from dotenv import load_dotenv

from .errors import ConfigError

load_dotenv()

CONFIG_FILE_PATH = Path(__file__).parent / "config.yaml"

logger = logging.getLogger(__name__)


def load_config(config_path: Path | str) -> Dict[str, Any]:
    """Read the engine/index/locale sections from a YAML file.

    An empty file yields ``{}``; a missing file, invalid YAML or a top level
    that is not a mapping raises ConfigError.
    """
    path = Path(config_path)
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigError(f"No search configuration at {path}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Search configuration {path} is not valid YAML: {e}") from e

    if data is not None and not isinstance(data, dict):
        raise ConfigError(f"Configuration file '{path}' must contain a mapping")
    return data or {}


@dataclass(frozen=True)
class EngineSettings:
    url: str = "http://localhost:9200"
    timeout: float = 10.0
    api_key: Optional[str] = None
    items_index: str = "items"
    default_locale: str = "sk"
    supported_locales: Tuple[str, ...] = field(default=("sk", "cs", "en"))

    @classmethod
    def from_config(
        cls, config: Optional[Dict[str, Any]] = None, *, use_env: bool = True
    ) -> "EngineSettings":
        """Build settings from a config dict (default: the bundled config.yaml).

        Env overrides (when ``use_env``):
          - ELASTICSEARCH_URL
          - ELASTICSEARCH_TIMEOUT
          - ELASTICSEARCH_API_KEY
          - SEARCH_LOCALE
        """
        cfg = load_config(CONFIG_FILE_PATH) if config is None else dict(config)

        engine_cfg = cfg.get("engine") or {}
        index_cfg = cfg.get("index") or {}
        locale_cfg = cfg.get("locales") or {}

        url = engine_cfg.get("url", cls.url)
        timeout = engine_cfg.get("timeout", cls.timeout)
        api_key = engine_cfg.get("api_key")
        default_locale = locale_cfg.get("default", cls.default_locale)

        if use_env:
            url = os.environ.get("ELASTICSEARCH_URL", url)
            timeout = os.environ.get("ELASTICSEARCH_TIMEOUT", timeout)
            api_key = os.environ.get("ELASTICSEARCH_API_KEY", api_key)
            default_locale = os.environ.get("SEARCH_LOCALE", default_locale)

        try:
            timeout = float(timeout)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid engine timeout: {timeout!r}") from e

        supported = tuple(locale_cfg.get("supported") or (default_locale,))
        if default_locale not in supported:
            raise ConfigError(
                f"Default locale {default_locale!r} is not one of {list(supported)}"
            )

        return cls(
            url=url.rstrip("/"),
            timeout=timeout,
            api_key=api_key or None,
            items_index=index_cfg.get("items", cls.items_index),
            default_locale=default_locale,
            supported_locales=supported,
        )
