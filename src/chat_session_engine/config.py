"""Engine configuration loaded from the environment."""

import os

from pydantic import BaseModel, ConfigDict, Field

ENV_PREFIX = "CHAT_ENGINE_"


class EngineConfig(BaseModel):
    """Tunables for the simulated reply latency (milliseconds)."""

    model_config = ConfigDict(frozen=True)

    delay_base_ms: int = Field(default=500, ge=0)
    delay_per_char_ms: int = Field(default=4, ge=0)
    delay_cap_ms: int = Field(default=1400, ge=0)

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Build a config, overriding defaults with CHAT_ENGINE_* variables."""
        overrides = {}
        for name in cls.model_fields:
            value = os.getenv(f"{ENV_PREFIX}{name.upper()}")
            if value is not None:
                overrides[name] = value
        return cls(**overrides)
