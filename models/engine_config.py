"""Engine configuration."""

from dataclasses import dataclass


@dataclass(frozen=True)
class EngineConfig:
    """Tuning knobs shared by every engine operation."""

    workers: int = 1
    min_rows_per_task: int = 64
    sample_stride: int = 1
    height_scale: float = 0.2
    iso_sample_step: int = 4

    def __post_init__(self):
        if self.workers < 1:
            raise ValueError(f"Workers must be >= 1, got {self.workers}")
        if self.min_rows_per_task < 1:
            raise ValueError(f"min_rows_per_task must be >= 1, got {self.min_rows_per_task}")
        if self.sample_stride < 1:
            raise ValueError(f"Sample stride must be >= 1, got {self.sample_stride}")
        if self.iso_sample_step < 1:
            raise ValueError(f"Isometric sample step must be >= 1, got {self.iso_sample_step}")


DEFAULT_CONFIG = EngineConfig()
