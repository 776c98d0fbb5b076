from __future__ import annotations

import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, Field


class Settings(BaseModel):
    # Core
    validate_tables: bool = Field(
        default=False,
        description="Reject substitution tables that are not bijections before encrypting/decrypting",
    )

    # Evaluation
    roundtrip_vectors: int = Field(default=1000, ge=1)
    sac_trials: int = Field(default=200, ge=1)

    # Reproducibility
    global_seed: int = Field(default=1337)

    # Paths
    project_root: str = Field(default=os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir)))
    runs_dir: str = Field(default="runs")


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    # Load .env if present
    load_dotenv()

    def _bool(name: str, default: bool) -> bool:
        v = os.getenv(name)
        if v is None:
            return default
        return v.strip().lower() in {"1", "true", "yes", "y", "on"}

    return Settings(
        validate_tables=_bool("RIJNCORE_VALIDATE_TABLES", False),
        roundtrip_vectors=int(os.getenv("RIJNCORE_ROUNDTRIP_VECTORS", "1000")),
        sac_trials=int(os.getenv("RIJNCORE_SAC_TRIALS", "200")),
        global_seed=int(os.getenv("GLOBAL_SEED", "1337")),
        runs_dir=os.getenv("RIJNCORE_RUNS_DIR", "runs"),
    )
