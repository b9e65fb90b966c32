from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from thinline import __version__
from thinline.config import AppConfig, load_config
from thinline.types import EdgeOperator, ForegroundPolarity, MarkingMethod

app = typer.Typer(no_args_is_help=True)
console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.callback()
def main() -> None:
    """thinline command-line interface."""


@app.command()
def run(
    image: Path = typer.Option(..., "--image", "-i", exists=True, readable=True, help="Input image path"),
    out: Path | None = typer.Option(None, "--out", "-o", help="Output PNG path. Default: <image>_thin.png"),
    config: Path | None = typer.Option(None, "--config", exists=True, readable=True, help="YAML config path"),
    debug: Path | None = typer.Option(None, "--debug", help="Debug artifacts output directory"),
    foreground: str | None = typer.Option(None, "--foreground", "-f", help="Line color: black/b | white/w"),
    method: str | None = typer.Option(None, "--method", "-m", help="Thinning method: standard/s | modified/m"),
    edge: str | None = typer.Option(None, "--edge", "-e", help="Edge detection: sobel/s | sobel4/s4"),
    threshold: float | None = typer.Option(
        None,
        "--threshold",
        "-t",
        help="Binarization level in [0, 1]; applied to edges when --edge is set",
    ),
    no_thin: bool = typer.Option(False, "--no-thin", help="Skip thinning, only preprocess"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every thinning iteration"),
) -> None:
    """Threshold or edge-detect an image, then thin its lines to one pixel width."""
    from thinline.pipeline import run_pipeline

    _configure_logging(verbose)
    try:
        cfg = load_config(config)
        if foreground is not None:
            cfg.foreground = ForegroundPolarity.parse(foreground)
        if method is not None:
            cfg.thinning.method = MarkingMethod.parse(method)
        if edge is not None:
            cfg.edge.enable = True
            cfg.edge.operator = EdgeOperator.parse(edge)
            if threshold is not None:
                cfg.edge.threshold = threshold
        elif threshold is not None:
            cfg.threshold.enable = True
            cfg.threshold.level = threshold
        if no_thin:
            cfg.thinning.enable = False
        cfg = AppConfig.model_validate(cfg.model_dump())
        result = run_pipeline(image_path=image, output_path=out, cfg=cfg, debug_dir=debug)
    except Exception as exc:  # pragma: no cover - CLI boundary
        console.print(f"[red]Failed:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    console.print(f"[green]Done.[/green] Output: {result.output_path}")
    thinning = result.report.get("thinning")
    if thinning:
        console.print(f"[cyan]Iterations:[/cyan] {thinning['iterations']} ({thinning['state']})")
        console.print(f"[cyan]Deleted pixels:[/cyan] {thinning['deleted_px']}")
    for warning in result.report.get("warnings", []):
        console.print(f"[yellow]Warning:[/yellow] {warning}")


@app.command()
def version() -> None:
    """Print the package version."""
    console.print(__version__)


if __name__ == "__main__":  # pragma: no cover
    app()
