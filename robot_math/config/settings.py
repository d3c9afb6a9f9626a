# robot_math/config/settings.py

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from ..control.linalg import DEFAULT_RANK_TOLERANCE
from ..control.riccati import DEFAULT_MAX_ITERATIONS, DEFAULT_TOLERANCE


def _known(cls, data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Drop keys the dataclass does not declare."""
    if not data:
        return {}
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in data.items() if k in names}


@dataclass
class RiccatiSettings:
    tolerance: float = DEFAULT_TOLERANCE
    max_iterations: int = DEFAULT_MAX_ITERATIONS

    def __post_init__(self) -> None:
        self.tolerance = float(self.tolerance)
        self.max_iterations = int(self.max_iterations)
        if self.tolerance <= 0:
            raise ValueError(f"riccati.tolerance must be positive, got {self.tolerance}")
        if self.max_iterations < 1:
            raise ValueError(f"riccati.max_iterations must be >= 1, got {self.max_iterations}")


@dataclass
class RankSettings:
    tolerance: float = DEFAULT_RANK_TOLERANCE

    def __post_init__(self) -> None:
        self.tolerance = float(self.tolerance)
        if self.tolerance <= 0:
            raise ValueError(f"rank.tolerance must be positive, got {self.tolerance}")


@dataclass
class LoggingSettings:
    level: str = "INFO"          # any logging level name
    log_dir: str = "logs"
    log_file: str = "robot_math.log"
    console: bool = False
    dedup_cooldown_s: float = 0.0

    @property
    def level_no(self) -> int:
        level = logging.getLevelName(str(self.level).upper())
        if not isinstance(level, int):
            raise ValueError(f"unknown logging level: {self.level}")
        return level


@dataclass
class MathSettings:
    riccati: RiccatiSettings = field(default_factory=RiccatiSettings)
    rank: RankSettings = field(default_factory=RankSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "MathSettings":
        data = data or {}
        return cls(
            riccati=RiccatiSettings(**_known(RiccatiSettings, data.get("riccati"))),
            rank=RankSettings(**_known(RankSettings, data.get("rank"))),
            logging=LoggingSettings(**_known(LoggingSettings, data.get("logging"))),
        )

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "MathSettings":
        data = yaml.safe_load(Path(path).read_text())
        return cls.from_dict(data)

    @classmethod
    def load(cls, profile: str = "default") -> "MathSettings":
        cfg_path = Path(__file__).resolve().parent / f"math_profile_{profile}.yaml"
        return cls.from_file(cfg_path)
