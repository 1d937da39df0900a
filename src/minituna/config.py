from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional

_DIRECTIONS = ("minimize", "maximize")
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class StudyConfig:
    """Settings for creating and running a study."""
    n_trials: int = 100
    direction: str = "minimize"  # "minimize" or "maximize"
    seed: Optional[int] = None
    verbose: bool = True
    log_level: str = "INFO"

    def __post_init__(self):
        if isinstance(self.n_trials, bool) or not isinstance(self.n_trials, int):
            raise ValueError(f"n_trials must be an integer, got {self.n_trials!r}")
        if self.n_trials < 0:
            raise ValueError(f"n_trials must be non-negative, got {self.n_trials}")
        if self.direction not in _DIRECTIONS:
            raise ValueError(f"direction must be one of {_DIRECTIONS}, got {self.direction!r}")
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)):
            raise ValueError(f"seed must be an integer or None, got {self.seed!r}")
        self.log_level = str(self.log_level).upper()
        if self.log_level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {_LOG_LEVELS}, got {self.log_level!r}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StudyConfig":
        """Builds a config from a mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        return cls(**data)
