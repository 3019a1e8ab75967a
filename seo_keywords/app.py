"""Application wiring: configuration, environment, database, and lazily built services."""

import logging
import os
import random
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)


class KeywordToolApp:
    """Central application object shared by the CLI and embedding code.

    Usage::

        app = KeywordToolApp()
        app.initialize()
        service = app.get_generation_service()
        history = app.get_history_store()
    """

    def __init__(
        self,
        config_path: str = "config/settings.yaml",
        env_path: str = ".env",
        database_url: Optional[str] = None,
    ):
        self._config_path = config_path
        self._env_path = env_path
        self._database_url = database_url
        self.config: dict[str, Any] = {}
        self._initialized = False
        self._kv_store = None
        self._history_store = None
        self._settings_store = None
        self._rng: Optional[random.Random] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self) -> None:
        """Load .env and YAML configuration, create directories, and initialise the DB."""
        if self._initialized:
            return

        env_file = Path(self._env_path)
        if env_file.exists():
            load_dotenv(env_file)
            logger.info("Loaded environment from %s", self._env_path)

        self.config = self._load_config()

        for dir_key in ("data_dir", "export_dir"):
            dir_path = self.section("app").get(dir_key, "")
            if dir_path:
                Path(dir_path).mkdir(parents=True, exist_ok=True)

        from seo_keywords.database import init_db
        db_cfg = self.section("database")
        db_url = self._database_url or os.getenv("DATABASE_URL") or db_cfg.get("url")
        init_db(database_url=db_url, echo=db_cfg.get("echo", False))

        seed = self.section("generation").get("seed")
        self._rng = random.Random(seed) if seed is not None else random.Random()

        self._initialized = True
        logger.info("KeywordToolApp initialised.")

    def _load_config(self) -> dict[str, Any]:
        """Load the YAML configuration file."""
        config_file = Path(self._config_path)
        if not config_file.exists():
            logger.warning("Config file not found: %s; using defaults.", self._config_path)
            return {}
        with open(config_file, "r", encoding="utf-8") as fh:
            config = yaml.safe_load(fh) or {}
        logger.info("Configuration loaded from %s", self._config_path)
        return config

    def section(self, name: str) -> dict[str, Any]:
        value = self.config.get(name) or {}
        return value if isinstance(value, dict) else {}

    def _ensure_initialized(self) -> None:
        if not self._initialized:
            self.initialize()

    # ------------------------------------------------------------------
    # Lazy accessors
    # ------------------------------------------------------------------

    def get_kv_store(self):
        self._ensure_initialized()
        if self._kv_store is None:
            from seo_keywords.storage import SQLKeyValueStore
            self._kv_store = SQLKeyValueStore()
        return self._kv_store

    def get_settings_store(self):
        if self._settings_store is None:
            from seo_keywords.storage import SETTINGS_STORAGE_KEY, SettingsStore
            key = self.section("settings").get("storage_key", SETTINGS_STORAGE_KEY)
            self._settings_store = SettingsStore(self.get_kv_store(), storage_key=key)
        return self._settings_store

    def get_history_store(self):
        if self._history_store is None:
            from seo_keywords.modules.search_history.history_store import (
                DEFAULT_MAX_ITEMS,
                HISTORY_STORAGE_KEY,
                SearchHistoryStore,
            )
            hist_cfg = self.section("history")
            self._history_store = SearchHistoryStore(
                self.get_kv_store(),
                storage_key=hist_cfg.get("storage_key", HISTORY_STORAGE_KEY),
                max_items=int(hist_cfg.get("max_items", DEFAULT_MAX_ITEMS)),
                rng=self._rng,
            )
        return self._history_store

    def get_exporter(self, export_dir: Optional[str] = None):
        from seo_keywords.modules.search_history.exporter import JSONFileExporter
        self._ensure_initialized()
        return JSONFileExporter(export_dir or self.section("app").get("export_dir", "data/exports"))

    def get_local_engine(self):
        from seo_keywords.modules.keyword_generation.engine import LocalGenerationEngine
        self._ensure_initialized()
        delay = float(self.section("generation").get("simulated_delay_seconds", 0.1))
        return LocalGenerationEngine(rng=self._rng, delay_seconds=delay)

    def get_remote_client(self):
        """Build the configured remote client, or ``None`` when remote generation is off."""
        self._ensure_initialized()
        remote_cfg = self.section("remote")
        if not remote_cfg.get("enabled", True):
            return None

        provider = remote_cfg.get("provider", "worker")
        timeout = int(remote_cfg.get("timeout", 30))
        if provider == "openai":
            from seo_keywords.integrations.llm_client import LLMClient
            llm_cfg = self.section("llm")
            return LLMClient(
                api_key=self.get_settings_store().get_api_key() or None,
                model=llm_cfg.get("model", "gpt-4o-mini"),
                max_tokens=int(llm_cfg.get("max_tokens", 2000)),
                temperature=float(llm_cfg.get("temperature", 0.7)),
                timeout=timeout,
            )
        if provider == "worker":
            from seo_keywords.integrations.keyword_worker import KeywordWorkerClient
            endpoint = os.getenv("KEYWORD_WORKER_URL") or remote_cfg.get("endpoint")
            return KeywordWorkerClient(endpoint=endpoint, timeout=timeout)

        logger.warning("Unknown remote provider %r; remote generation disabled", provider)
        return None

    def get_generation_service(self, use_remote: bool = True):
        from seo_keywords.modules.keyword_generation.service import KeywordGenerationService
        remote = self.get_remote_client() if use_remote else None
        return KeywordGenerationService(engine=self.get_local_engine(), remote=remote)
