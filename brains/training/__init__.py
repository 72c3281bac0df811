"""Training driver, metrics and preset pipelines."""

from .metrics import compute_metrics, default_metrics
from .pipelines import load_config, load_preset, presets, run_pipeline
from .trainer import Trainer

__all__ = [
    "Trainer",
    "compute_metrics",
    "default_metrics",
    "load_config",
    "load_preset",
    "presets",
    "run_pipeline",
]
