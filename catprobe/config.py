from __future__ import annotations

import os
from typing import Optional

import yaml
from pydantic import BaseModel, Field

from .constants import DEFAULT_ISSUER, DEFAULT_KEY, DEFAULT_USER_AGENT
from .contracts import TokenTransport


class TokenConfig(BaseModel):
    """Settings used to issue the access token."""

    key: str = DEFAULT_KEY
    ttl: int = Field(default=20, ge=0, description="Renewal ttl in seconds")
    token_type: TokenTransport = TokenTransport.COOKIE
    issuer: str = DEFAULT_ISSUER


class SessionConfig(BaseModel):
    """Settings for the segment polling session."""

    max_iterations: int = Field(default=5, ge=0)
    sleep: int = Field(default=4000, ge=0, description="Delay between fetches in ms")
    strict_content_length: bool = False
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = 10.0


class ProbeConfig(BaseModel):
    """Top-level configuration model."""

    token: TokenConfig = TokenConfig()
    session: SessionConfig = SessionConfig()


def load_config(path: Optional[str] = None) -> ProbeConfig:
    """Load configuration from YAML file.

    Args:
        path: Optional path to config file. Falls back to CATPROBE_CONFIG env
            variable or 'catprobe.yaml' in the current directory.
    """

    config_path = path or os.getenv("CATPROBE_CONFIG", "catprobe.yaml")
    if os.path.exists(config_path):
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        config = ProbeConfig(**data)
    else:
        config = ProbeConfig()

    env_key = os.getenv("CATPROBE_KEY")
    if env_key:
        config.token.key = env_key
    env_issuer = os.getenv("CATPROBE_ISSUER")
    if env_issuer:
        config.token.issuer = env_issuer
    env_token_type = os.getenv("CATPROBE_TOKEN_TYPE")
    if env_token_type:
        config.token.token_type = TokenTransport(env_token_type)
    return config
