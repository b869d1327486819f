from __future__ import annotations

import logging
import random
import re
import sys
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

import typer

from .config import AppConfig, load_config
from .core.errors import TinyOutcomeError
from .core.outcome import OutcomeTracker
from .utils.logging import setup_logging


app = typer.Typer(add_completion=False)
logger = logging.getLogger(__name__)

_TOKEN_SPLIT = re.compile(r"[\s,]+")


def _tokens(text: str) -> Iterator[Union[int, str]]:
    for tok in _TOKEN_SPLIT.split(text.strip()):
        if not tok:
            continue
        # Non-numeric tokens are passed through so push() rejects them loudly.
        yield int(tok) if tok.isascii() and tok.isdigit() else tok


def _feed(cfg: AppConfig, tracker: OutcomeTracker, samples: Iterable[Union[int, str]]) -> int:
    stats_every = cfg.runtime.stats_every
    log_every = cfg.runtime.log_every
    pushed = 0
    for sample in samples:
        tracker.push(sample)  # type: ignore[arg-type]
        pushed += 1
        if stats_every and pushed % stats_every == 0:
            tracker.update_stats()
        if log_every and pushed % log_every == 0:
            logger.info("progress", extra={"pushed": pushed, **tracker.to_dict()})
    tracker.update_stats()
    return pushed


def _summary(tracker: OutcomeTracker, pushed: int) -> None:
    typer.echo(str(tracker))
    typer.echo(
        f"pushed={pushed} prediction={tracker.prediction().value} "
        f"min={tracker.min:.4f} max={tracker.max:.4f} avg={tracker.avg:.4f}"
    )


def _setup(config: Optional[Path], log_level: Optional[str]) -> AppConfig:
    try:
        cfg = load_config(config)
    except TinyOutcomeError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=2)
    setup_logging(log_level or cfg.env.LOG_LEVEL)
    return cfg


@app.command()
def replay(
    path: str = typer.Argument(..., help="File of 0/1 samples (whitespace or comma separated), '-' for stdin"),
    config: Optional[Path] = typer.Option(None, help="YAML config, defaults to ./config.yaml if present"),
    log_level: Optional[str] = typer.Option(None),
) -> None:
    """Replay recorded outcomes through a tracker and print its final state."""
    cfg = _setup(config, log_level)
    if path == "-":
        text = sys.stdin.read()
    else:
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            typer.echo(f"error: {exc}", err=True)
            raise typer.Exit(code=1)

    tracker = cfg.runtime.tracker.build()
    try:
        pushed = _feed(cfg, tracker, _tokens(text))
    except TinyOutcomeError as exc:
        logger.error("replay rejected input", extra={"error": str(exc), "samples": tracker.samples})
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=2)
    _summary(tracker, pushed)


@app.command()
def simulate(
    count: int = typer.Option(1000, min=1, help="Number of samples to generate"),
    bias: float = typer.Option(0.5, min=0.0, max=1.0, help="Probability of a 1"),
    seed: Optional[int] = typer.Option(None, help="Seed for reproducible runs"),
    config: Optional[Path] = typer.Option(None),
    log_level: Optional[str] = typer.Option(None),
) -> None:
    """Feed a tracker with Bernoulli(bias) outcomes."""
    cfg = _setup(config, log_level)
    rng = random.Random(seed)
    tracker = cfg.runtime.tracker.build()
    pushed = _feed(cfg, tracker, (1 if rng.random() < bias else 0 for _ in range(count)))
    _summary(tracker, pushed)


if __name__ == "__main__":
    app()
