"""
Configuration for MindLoom.

Supports loading from:
1. Environment variables (highest priority)
2. YAML config file
3. Default values (fallback)
"""

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field


class LLMConfig(BaseModel):
    """Generative-text provider configuration."""

    provider: str = "ollama"  # ollama, openai
    # Tried in order until one answers
    models: list[str] = Field(default_factory=lambda: ["llama3.1:8b"])
    base_url: str = "http://localhost:11434"
    api_key: str | None = None
    system_prompt: str = "You are a helpful assistant that writes clear, concise content."
    temperature: float = 0.7
    max_tokens: int = 512
    timeout: float = 120.0


class StoreConfig(BaseModel):
    """Shared tree store configuration."""

    backend: str = "memory"  # memory, sqlite
    db_path: str = "data/mindloom.db"


class LayoutConfig(BaseModel):
    """Radial layout geometry."""

    anchor_x: float = 400.0
    anchor_y: float = 200.0
    primary_radius: float = 300.0
    secondary_radius: float = 180.0


class TriggerConfig(BaseModel):
    """Automatic regeneration policy."""

    debounce_seconds: float = 3.0
    min_content_length: int = 50


class ServerConfig(BaseModel):
    """HTTP server settings used by main.py."""

    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False
    log_level: str = "info"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    log_to_file: bool = True
    log_dir: str = "logs"
    file_rotation: str = "10 MB"
    file_retention: str = "7 days"
    compression: str = "zip"
    serialize: bool = True


class Config(BaseModel):
    """Main configuration."""

    llm: LLMConfig = Field(default_factory=LLMConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    trigger: TriggerConfig = Field(default_factory=TriggerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> "Config":
        """
        Load configuration from environment variables.

        Priority: .env file -> system environment variables -> defaults

        Args:
            env_file: Optional path to .env file (default: .env in project root)

        Returns:
            Config instance

        Environment variables:
            MINDLOOM_LLM_PROVIDER: LLM provider (ollama, openai)
            MINDLOOM_LLM_MODELS: Comma-separated model names, tried in order
            MINDLOOM_LLM_BASE_URL: LLM base URL
            MINDLOOM_LLM_API_KEY: LLM API key (for OpenAI-compatible APIs)
            MINDLOOM_STORE_BACKEND: Tree store backend (memory, sqlite)
            MINDLOOM_STORE_DB_PATH: SQLite database path
            MINDLOOM_TRIGGER_DEBOUNCE_SECONDS: Quiet period before regeneration
            MINDLOOM_TRIGGER_MIN_CONTENT_LENGTH: Minimum text length to regenerate
            MINDLOOM_LOG_LEVEL: Log level
            MINDLOOM_SERVER_HOST / MINDLOOM_SERVER_PORT: Bind address for main.py
        """
        # Load .env file if provided or exists
        if env_file:
            load_dotenv(env_file)
        elif Path(".env").exists():
            load_dotenv()

        def get_env(key: str, default: Any = None) -> Any:
            """Get environment variable with type conversion."""
            value = os.getenv(key)
            if value is None:
                return default
            # If value is empty string, return default
            if value == "":
                return default
            # Convert boolean strings
            if isinstance(default, bool):
                return str(value).lower() in ("true", "1", "yes")
            # Convert numeric strings
            if isinstance(default, int):
                return int(value)
            if isinstance(default, float):
                return float(value)
            # Convert comma-separated lists
            if isinstance(default, list):
                return [item.strip() for item in value.split(",") if item.strip()]
            return value

        return cls(
            llm=LLMConfig(
                provider=get_env("MINDLOOM_LLM_PROVIDER", "ollama"),
                models=get_env("MINDLOOM_LLM_MODELS", ["llama3.1:8b"]),
                base_url=get_env("MINDLOOM_LLM_BASE_URL", "http://localhost:11434"),
                api_key=get_env("MINDLOOM_LLM_API_KEY"),
                temperature=get_env("MINDLOOM_LLM_TEMPERATURE", 0.7),
                max_tokens=get_env("MINDLOOM_LLM_MAX_TOKENS", 512),
                timeout=get_env("MINDLOOM_LLM_TIMEOUT", 120.0),
            ),
            store=StoreConfig(
                backend=get_env("MINDLOOM_STORE_BACKEND", "memory"),
                db_path=get_env("MINDLOOM_STORE_DB_PATH", "data/mindloom.db"),
            ),
            layout=LayoutConfig(
                anchor_x=get_env("MINDLOOM_LAYOUT_ANCHOR_X", 400.0),
                anchor_y=get_env("MINDLOOM_LAYOUT_ANCHOR_Y", 200.0),
                primary_radius=get_env("MINDLOOM_LAYOUT_PRIMARY_RADIUS", 300.0),
                secondary_radius=get_env("MINDLOOM_LAYOUT_SECONDARY_RADIUS", 180.0),
            ),
            trigger=TriggerConfig(
                debounce_seconds=get_env("MINDLOOM_TRIGGER_DEBOUNCE_SECONDS", 3.0),
                min_content_length=get_env("MINDLOOM_TRIGGER_MIN_CONTENT_LENGTH", 50),
            ),
            logging=LoggingConfig(
                level=get_env("MINDLOOM_LOG_LEVEL", "INFO"),
                log_to_file=get_env("MINDLOOM_LOG_TO_FILE", True),
                log_dir=get_env("MINDLOOM_LOG_DIR", "logs"),
                file_rotation=get_env("MINDLOOM_LOG_FILE_ROTATION", "10 MB"),
                file_retention=get_env("MINDLOOM_LOG_FILE_RETENTION", "7 days"),
                compression=get_env("MINDLOOM_LOG_COMPRESSION", "zip"),
                serialize=get_env("MINDLOOM_LOG_SERIALIZE", True),
            ),
            server=ServerConfig(
                host=get_env("MINDLOOM_SERVER_HOST", "0.0.0.0"),
                port=get_env("MINDLOOM_SERVER_PORT", 8000),
                reload=get_env("MINDLOOM_SERVER_RELOAD", False),
                log_level=get_env("MINDLOOM_SERVER_LOG_LEVEL", "info"),
            ),
        )

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> "Config":
        """
        Load configuration from YAML file.

        Args:
            yaml_path: Path to YAML configuration file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If YAML file doesn't exist
            yaml.YAMLError: If YAML is invalid
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        with open(yaml_path) as f:
            data = yaml.safe_load(f)

        return cls(**(data or {}))

    @classmethod
    def from_env_or_yaml(
        cls, yaml_path: str | Path | None = None, env_file: str | Path | None = None
    ) -> "Config":
        """
        Load configuration with priority: env vars > YAML > defaults.

        Args:
            yaml_path: Optional path to YAML config
            env_file: Optional path to .env file

        Returns:
            Config instance
        """
        # Start with YAML if provided
        if yaml_path and Path(yaml_path).exists():
            with open(yaml_path) as f:
                config_dict = yaml.safe_load(f) or {}
        else:
            config_dict = {}

        # Override with env vars if present
        env_config = cls.from_env(env_file=env_file)

        # Merge: env vars override YAML
        final_dict = {**config_dict}

        # Apply env overrides (non-default values)
        default = cls()
        if env_config.llm != default.llm:
            final_dict["llm"] = env_config.llm.model_dump()
        if env_config.store != default.store:
            final_dict["store"] = env_config.store.model_dump()
        if env_config.layout != default.layout:
            final_dict["layout"] = env_config.layout.model_dump()
        if env_config.trigger != default.trigger:
            final_dict["trigger"] = env_config.trigger.model_dump()
        if env_config.logging != default.logging:
            final_dict["logging"] = env_config.logging.model_dump()
        if env_config.server != default.server:
            final_dict["server"] = env_config.server.model_dump()

        return cls(**final_dict) if final_dict else env_config


# Default config instance
default_config = Config()
