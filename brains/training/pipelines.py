"""Preset configuration and end-to-end training runs."""

from __future__ import annotations

import json
import time
from copy import deepcopy
from pathlib import Path
from typing import Dict, List, Mapping, Sequence

from ..core.network import initialize
from ..core.types import RunResult
from ..data import get_dataset
from ..reporting import EpochLog, parameter_count, summarize, write_summary
from .trainer import Trainer

_PRESETS: Dict[str, Mapping[str, object]] = {
    "logic-gates": {
        "data": {"name": "logic_gates", "options": {}},
        "model": {"hidden": [3]},
        "train": {
            "epochs": 100,
            "lr": 0.2,
            "seed": 0,
            "run_dir": "runs/logic-gates",
        },
    },
    "xor": {
        "data": {"name": "xor", "options": {"low": -1.0}},
        "model": {"hidden": [3]},
        "train": {
            "epochs": 300,
            "lr": 0.1,
            "seed": 1,
            "run_dir": "runs/xor",
        },
    },
    "and-direct": {
        "data": {"name": "and", "options": {}},
        "model": {"hidden": []},
        "train": {
            "epochs": 50,
            "lr": 0.2,
            "seed": 0,
            "run_dir": "runs/and-direct",
        },
    },
    "logic-gates-lr-sweep": {
        "sweep": {"learning_rates": [0.05, 0.2], "seeds": [0, 1]},
        "data": {"name": "logic_gates", "options": {}},
        "model": {"hidden": [3]},
        "train": {"epochs": 50, "run_dir": "runs/sweep"},
    },
}

_PRESET_DIR = Path(__file__).resolve().parent / "presets"
_FILE_PRESETS_CACHE: Dict[str, Mapping[str, object]] | None = None


def _read_preset_file(path: Path) -> Mapping[str, object]:
    text = path.read_text()
    suffix = path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        try:
            import yaml  # type: ignore
        except ImportError as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("PyYAML is required to load preset files in YAML format") from exc
        data = yaml.safe_load(text) or {}
    elif suffix == ".json":
        data = json.loads(text or "{}")
    else:
        raise ValueError(f"Unsupported preset file type: {path.suffix}")

    if not isinstance(data, Mapping):
        raise TypeError(f"Preset {path.name} must decode to a mapping")
    return data


def _check_sections(label: str, data: Mapping[str, object]) -> None:
    missing = {"data", "model", "train"} - set(data)
    if missing:
        raise KeyError(f"{label} is missing required sections: {', '.join(sorted(missing))}")


def _file_presets() -> Dict[str, Mapping[str, object]]:
    global _FILE_PRESETS_CACHE
    if _FILE_PRESETS_CACHE is None:
        found: Dict[str, Mapping[str, object]] = {}
        if _PRESET_DIR.exists():
            for file in sorted(_PRESET_DIR.iterdir()):
                if file.suffix.lower() not in {".yaml", ".yml", ".json"}:
                    continue
                data = _read_preset_file(file)
                _check_sections(f"Preset {file.name}", data)
                found[file.stem] = json.loads(json.dumps(data))
        _FILE_PRESETS_CACHE = found
    return {name: deepcopy(cfg) for name, cfg in _FILE_PRESETS_CACHE.items()}


def presets() -> Mapping[str, Mapping[str, object]]:
    combined: Dict[str, Mapping[str, object]] = {}
    combined.update({name: deepcopy(cfg) for name, cfg in _PRESETS.items()})
    combined.update(_file_presets())
    return combined


def load_preset(name: str) -> Mapping[str, object]:
    file_overrides = _file_presets()
    if name in file_overrides:
        return file_overrides[name]
    try:
        return deepcopy(_PRESETS[name])
    except KeyError as exc:
        raise KeyError(f"Unknown preset: {name}") from exc


def load_config(path: str | Path) -> Mapping[str, object]:
    """Read a full run configuration from a JSON or YAML file."""

    path = Path(path)
    data = _read_preset_file(path)
    _check_sections(f"Config {path.name}", data)
    return data


def run_pipeline(config: Mapping[str, object]) -> RunResult | List[RunResult]:
    if "sweep" in config:
        return _run_sweep(config)
    return _train_single(config)


def _run_sweep(config: Mapping[str, object]) -> List[RunResult]:
    sweep_cfg = config["sweep"]
    base_dir = Path(str(config.get("train", {}).get("run_dir", "runs/sweep")))
    results: List[RunResult] = []
    for lr in sweep_cfg.get("learning_rates", [0.2]):
        for seed in sweep_cfg.get("seeds", [0]):
            cfg = deepcopy(dict(config))
            cfg.pop("sweep", None)
            train_cfg = cfg.setdefault("train", {})
            train_cfg.update({"lr": lr, "seed": seed})
            train_cfg["run_dir"] = str(base_dir / f"lr{lr}_s{seed}")
            results.append(_train_single(cfg))
    return results


def _train_single(config: Mapping[str, object]) -> RunResult:
    _check_sections("Config", config)
    data_cfg = dict(config["data"])
    model_cfg = dict(config["model"])
    train_cfg = dict(config["train"])

    dataset = get_dataset(str(data_cfg["name"]), **dict(data_cfg.get("options", {})))
    data_spec = dataset.data_spec

    d_in = int(model_cfg.get("d_in", data_spec.d_in))
    d_out = int(model_cfg.get("d_out", data_spec.d_out))
    if d_in != data_spec.d_in:
        raise ValueError(f"Configured d_in={d_in} but dataset has inputs of width {data_spec.d_in}")
    if d_out != data_spec.d_out:
        raise ValueError(
            f"Configured d_out={d_out} but dataset has expected vectors of width {data_spec.d_out}"
        )
    hidden = [int(h) for h in model_cfg.get("hidden", [])]
    dims = [d_in, *hidden, d_out]

    seed = int(train_cfg.get("seed", 0))
    epochs = int(train_cfg.get("epochs", 100))
    lr = float(train_cfg.get("lr", 0.2))
    patience = train_cfg.get("early_stopping_patience")
    patience = int(patience) if patience is not None else None
    metrics_cfg = train_cfg.get("metrics", "default")
    if not isinstance(metrics_cfg, str):
        metrics_cfg = ",".join(str(item) for item in metrics_cfg)

    run_dir = _resolve_run_dir(train_cfg, dataset.name)
    run_dir.mkdir(parents=True, exist_ok=True)

    _print_startup_summary(
        dataset_name=dataset.name,
        dims=dims,
        learning_rate=lr,
        epochs=epochs,
        metrics=metrics_cfg,
        param_count=parameter_count(dims),
    )

    log = EpochLog(run_dir / "metrics.jsonl", learning_rate=lr)
    network = initialize(dims, seed=seed)
    trainer = Trainer(dataset.inputs, dataset.expecteds, learning_rate=lr, callbacks=[log])
    result = trainer.run(
        network,
        epochs,
        metric_names=metrics_cfg,
        early_stopping_patience=patience,
    )

    summary = dict(
        summarize(result, dataset=dataset.name, layer_sizes=dims, learning_rate=lr, seed=seed)
    )
    summary["config"] = _safe_config(config, dims)
    summary_path = write_summary(run_dir / "summary.json", summary)

    return RunResult(
        epochs=result.epochs,
        initial_error=summary["initial_error"],
        final_error=summary["final_error"],
        metrics_path=str(log.path),
        summary_path=summary_path,
    )


def _resolve_run_dir(train_cfg: Mapping[str, object], dataset: str) -> Path:
    if "run_dir" in train_cfg:
        return Path(str(train_cfg["run_dir"]))
    timestamp = time.strftime("%Y%m%d-%H%M%S")
    return Path("runs") / timestamp / dataset


def _safe_config(config: Mapping[str, object], dims: Sequence[int]) -> Mapping[str, object]:
    copied = json.loads(json.dumps(config))
    copied.setdefault("model", {})["layer_sizes"] = list(dims)
    # Summaries of identical runs stay byte-identical wherever they are written.
    copied.get("train", {}).pop("run_dir", None)
    return copied


def _print_startup_summary(
    *,
    dataset_name: str,
    dims: Sequence[int],
    learning_rate: float,
    epochs: int,
    metrics: str,
    param_count: int,
) -> None:
    print("=== brains run ===")
    print(f"Dataset       : {dataset_name}")
    print(f"Layer sizes   : {list(dims)}")
    print(f"Learning rate : {learning_rate}")
    print(f"Epochs        : {epochs}")
    print(f"Metrics       : {metrics}")
    print(f"Parameters    : {param_count}")
    print("==================")


__all__ = ["load_config", "load_preset", "presets", "run_pipeline"]
