"""
--------------------------------------------------------------------------------
<ribodesign project>
ribodesign/walker/config.py

Walk configuration (YAML, top-level `walker:` key):

  walker:
    alphabet: rna            # preset (rna|dna) or list of symbols
    init_sequence: AAAAAAAAAAAAAAA
    # length: 15             # instead of init_sequence → random start
    seed: 7
    score: gc_content
    decision:
      kind: metropolis_hastings
      scale_factor: 0.5
    max_successive_fails: 10
    warmup_steps: 8

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Literal, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .alphabet import PRESETS
from .decision import resolve_decision_kind
from .errors import ConfigurationError
from .scoring import list_scores

# Nucleotide spelling fixes applied to init_sequence for the presets
_REWRITES = {"rna": ("T", "U"), "dna": ("U", "T")}


class DecisionConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    kind: Literal["greedy", "metropolis_hastings"] = "greedy"
    scale_factor: float = Field(default=1.0, gt=0.0)

    @field_validator("kind", mode="before")
    @classmethod
    def _canonical_kind(cls, v):
        return resolve_decision_kind(v)


class WalkConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    alphabet: Union[str, List[str]] = "rna"
    length: Optional[int] = Field(default=None, ge=1)
    init_sequence: Optional[str] = None
    seed: Optional[int] = None
    score: str = "gc_content"
    decision: DecisionConfig = Field(default_factory=DecisionConfig)
    max_successive_fails: int = Field(default=100, ge=0)
    warmup_steps: int = Field(default=0, ge=0)

    @field_validator("alphabet")
    @classmethod
    def _known_alphabet(cls, v):
        if isinstance(v, str):
            key = v.strip().lower()
            if key not in PRESETS:
                raise ValueError(f"Unknown alphabet preset {v!r}. Allowed: {sorted(PRESETS)} or a list of symbols")
            return key
        if len(v) < 2:
            raise ValueError("alphabet needs at least 2 symbols")
        if len(set(v)) != len(v):
            raise ValueError(f"alphabet symbols must be unique, got {v}")
        return v

    @field_validator("score")
    @classmethod
    def _known_score(cls, v: str):
        key = v.strip().lower()
        if key not in list_scores():
            raise ValueError(f"Unknown score {v!r}. Allowed: {list_scores()}")
        return key

    @model_validator(mode="after")
    def _start_state(self) -> "WalkConfig":
        if self.init_sequence is not None:
            seq = self.init_sequence.strip()
            if isinstance(self.alphabet, str):
                old, new = _REWRITES[self.alphabet]
                seq = seq.upper().replace(old, new)
            if not seq:
                raise ValueError("init_sequence must be non-empty")
            symbols = PRESETS[self.alphabet] if isinstance(self.alphabet, str) else self.alphabet
            bad = sorted({ch for ch in seq if ch not in symbols})
            if bad:
                raise ValueError(f"init_sequence contains symbols outside the alphabet: {bad}")
            if self.length is not None and self.length != len(seq):
                raise ValueError(f"length={self.length} disagrees with init_sequence length {len(seq)}")
            self.init_sequence = seq
            self.length = len(seq)
        elif self.length is None:
            raise ValueError("one of `length` or `init_sequence` is required")
        return self


class RootConfig(BaseModel):
    walker: WalkConfig


def parse_walk_config(data: dict) -> WalkConfig:
    try:
        return RootConfig.model_validate(data).walker
    except ValidationError as e:
        raise ConfigurationError(f"Invalid walker config: {e}") from e


def load_walk_mapping(path: str | Path) -> dict:
    """
    Read `path` and return the raw `walker:` mapping (unvalidated), so callers
    can layer overrides before parse_walk_config().
    """
    cfg_path = Path(path)
    try:
        data = yaml.safe_load(cfg_path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigurationError(f"Config file not found: {cfg_path}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML ({cfg_path}): {e}") from e
    if not isinstance(data, dict) or not isinstance(data.get("walker"), dict):
        raise ConfigurationError(f"{cfg_path}: expected a top-level `walker:` mapping")
    return dict(data["walker"])


def load_walk_config(path: str | Path) -> WalkConfig:
    return parse_walk_config({"walker": load_walk_mapping(path)})
