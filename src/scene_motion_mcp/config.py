"""Server configuration via environment variables."""

from __future__ import annotations

import logging
import os
from typing import get_args

from pydantic import BaseModel, Field, field_validator

from .types import TransitionPolicy

VALID_TRANSITION_POLICIES = set(get_args(TransitionPolicy))
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _resolve_tracing_enabled(flag_value: str, tracking_uri: str) -> bool:
    """Derive tracing_enabled from env vars.

    - ``SCENE_TRACING_ENABLED=false`` → always disabled (explicit opt-out).
    - Otherwise enabled when ``MLFLOW_TRACKING_URI`` is non-empty.
    """
    if flag_value.lower() == "false":
        return False
    return bool(tracking_uri)


class ServerConfig(BaseModel):
    """Runtime configuration resolved from environment."""

    default_fps: int = Field(default=30, description="Frames per second when meta omits fps")
    default_width: int = Field(default=1920, description="Canvas width when meta omits width")
    default_height: int = Field(default=1080, description="Canvas height when meta omits height")
    default_animation_frames: int = Field(
        default=20,
        description="Animation window length when an animation omits durationInFrames",
    )
    transition_policy: TransitionPolicy = Field(
        default="reject",
        description="How final validation treats a transition longer than an adjacent scene",
    )
    log_level: str = Field(default="INFO")
    tracing_enabled: bool = Field(default=False)
    mlflow_tracking_uri: str = Field(default="")
    mlflow_experiment_name: str = Field(default="scene-motion-mcp")

    @field_validator("default_fps", "default_width", "default_height", "default_animation_frames")
    @classmethod
    def validate_positive_ints(cls, value: int) -> int:
        if value < 1:
            raise ValueError("Configuration values must be >= 1")
        return value

    @field_validator("transition_policy", mode="before")
    @classmethod
    def validate_transition_policy(cls, value: str) -> str:
        policy = value.strip().lower()
        if policy not in VALID_TRANSITION_POLICIES:
            allowed = ", ".join(sorted(VALID_TRANSITION_POLICIES))
            raise ValueError(f"Invalid transition policy '{value}'. Allowed: {allowed}")
        return policy

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in VALID_LOG_LEVELS:
            allowed = ", ".join(sorted(VALID_LOG_LEVELS))
            raise ValueError(f"Invalid log level '{value}'. Allowed: {allowed}")
        return level

    @classmethod
    def from_env(cls) -> ServerConfig:
        """Build config from environment variables."""
        return cls(
            default_fps=int(os.getenv("SCENE_DEFAULT_FPS", "30")),
            default_width=int(os.getenv("SCENE_DEFAULT_WIDTH", "1920")),
            default_height=int(os.getenv("SCENE_DEFAULT_HEIGHT", "1080")),
            default_animation_frames=int(os.getenv("SCENE_ANIMATION_FRAMES", "20")),
            transition_policy=os.getenv("SCENE_TRANSITION_POLICY", "reject"),
            log_level=os.getenv("SCENE_LOG_LEVEL", "INFO"),
            tracing_enabled=_resolve_tracing_enabled(
                os.getenv("SCENE_TRACING_ENABLED", ""),
                os.getenv("MLFLOW_TRACKING_URI", ""),
            ),
            mlflow_tracking_uri=os.getenv("MLFLOW_TRACKING_URI", ""),
            mlflow_experiment_name=os.getenv("MLFLOW_EXPERIMENT_NAME", "scene-motion-mcp"),
        )


# Singleton
_config: ServerConfig | None = None


def get_config() -> ServerConfig:
    """Return the global config singleton, creating it on first access.

    Loads ``~/.config/scene-motion-mcp/.env`` before reading env vars.
    Process environment always takes precedence over the config file.
    """
    global _config
    if _config is None:
        from .dotenv import load_dotenv

        injected = load_dotenv()
        if injected:
            logger = logging.getLogger(__name__)
            logger.info(
                "Loaded %d var(s) from config: %s",
                len(injected),
                ", ".join(injected.keys()),
            )
        _config = ServerConfig.from_env()
    return _config


def update_config(**overrides: object) -> ServerConfig:
    """Patch the live config with non-None overrides."""
    global _config
    cfg = get_config()
    data = cfg.model_dump()
    data.update({k: v for k, v in overrides.items() if v is not None})
    _config = ServerConfig(**data)
    return _config


def reset_config() -> None:
    """Reset the config singleton (for testing)."""
    global _config
    _config = None
