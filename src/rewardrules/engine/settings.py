from __future__ import annotations
from pathlib import Path
from typing import Optional
import random
from pydantic import BaseModel, Field, field_validator
from .parser import max_depth_ceiling

SETTINGS_PATH = Path.home() / ".rewardrules" / "settings.json"

class Settings(BaseModel):
    max_depth: int = Field(default=64, ge=1)
    strict_unknown_children: bool = False
    rng_seed_mode: str = "fixed"  # fixed | random
    rng_seed: int = 0

    @field_validator("max_depth")
    @classmethod
    def _below_recursion_limit(cls, v: int) -> int:
        ceiling = max_depth_ceiling()
        if v > ceiling:
            raise ValueError(f"max_depth must be <= {ceiling} at the current recursion limit")
        return v

    def make_rng(self, seed: Optional[int] = None) -> random.Random:
        if seed is not None:
            return random.Random(seed)
        if self.rng_seed_mode == "random":
            return random.Random()
        return random.Random(self.rng_seed)

def load_settings(path: Path = SETTINGS_PATH) -> Settings:
    if path.exists():
        return Settings.model_validate_json(path.read_text(encoding="utf-8"))
    s = Settings()
    save_settings(s, path)
    return s

def save_settings(s: Settings, path: Path = SETTINGS_PATH) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(s.model_dump_json(indent=2), encoding="utf-8")
