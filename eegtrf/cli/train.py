"""Train command for eegtrf CLI."""

from pathlib import Path
from typing import List, Union

import numpy as np
from rich.console import Console
from rich.table import Table
from rich import box

from eegtrf.core.config import TrainConfig
from eegtrf.core.validation import InvalidArgument
from eegtrf.trf.train import train


def load_trials(path: Path) -> Union[np.ndarray, List[np.ndarray]]:
    """
    Load time series from disk.

    ``.npy`` files hold a single trial; ``.npz`` files hold one trial per
    array, ordered by key.
    """
    path = Path(path)
    if not path.exists():
        raise InvalidArgument(f"File not found: {path}")
    if path.suffix == ".npy":
        return np.load(path, allow_pickle=False)
    if path.suffix == ".npz":
        with np.load(path, allow_pickle=False) as data:
            return [data[key] for key in sorted(data.files)]
    raise InvalidArgument(f"Unsupported file type {path.suffix!r} (expected .npy or .npz)")


def train_command(args):
    """
    Train a TRF model and save it.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed command-line arguments with:
        - stim, resp: Path - Input time series (.npy/.npz)
        - fs, dir, tmin, tmax, lam: Positional fit arguments
        - config: Path, optional - YAML file with training options
        - method, type, split, zeropad, dim, n_jobs: optional overrides
        - output: Path - Destination .npz file
    """
    console = Console()

    options = {}
    if args.config is not None:
        options = TrainConfig.from_yaml(args.config).model_dump()
    for key in ("dim", "method", "type", "split", "zeropad", "n_jobs"):
        value = getattr(args, key, None)
        if value is not None:
            options[key] = value
    config = TrainConfig.from_options(**options)

    stim = load_trials(args.stim)
    resp = load_trials(args.resp)

    model = train(stim, resp, args.fs, args.dir, args.tmin, args.tmax, args.lam, config=config)
    output = model.save(args.output)

    table = Table(
        title="TRF Model",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Parameter", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")

    table.add_row("Direction", "forward" if model.dir == 1 else "backward")
    table.add_row("Type", model.type.value)
    table.add_row("Method", config.method.value)
    table.add_row("Lambda", f"{args.lam:g}")
    table.add_row("Sample rate", f"{model.fs:g} Hz")
    table.add_row("Lags", f"{model.n_lags} ({model.t[0]:g} to {model.t[-1]:g} ms)")
    table.add_row("Weights", " x ".join(str(n) for n in model.w.shape))

    console.print(table)
    console.print(f"[green]Saved model to {output}[/green]")
    return output
