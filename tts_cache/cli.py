"""Typer CLI for synthesizing text and inspecting the cache."""
from pathlib import Path
from typing import List, Optional

import typer
# AWS credentials and region are read from the environment / .env
from dotenv import load_dotenv

from . import service
from .cache import DirectoryCacheStore
from .config import build_config, load_config
from .errors import TtsError
from .logging_config import setup_logging

load_dotenv()

app = typer.Typer(add_completion=False)


def _config(config_file: Optional[str], cache: Optional[bool], cache_path: Optional[str]):
    cfg = load_config(config_file) if config_file else build_config()
    updates = {}
    if cache is not None:
        updates["cache"] = cache
    if cache_path:
        updates["cache_path"] = cache_path
    return cfg.model_copy(update=updates) if updates else cfg


def parse_options(pairs: List[str]) -> dict:
    options = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise typer.BadParameter(f"Expected KEY=VALUE, got {pair!r}", param_hint="--option")
        options[key.strip()] = value
    return options


@app.command()
def synthesize(
    text: Optional[str] = typer.Argument(None, help="Text or speech markup to synthesize."),
    text_file: Optional[str] = typer.Option(None, help="Read the text from this file instead."),
    out: str = typer.Option("speech.out", help="Where to write the audio."),
    option: List[str] = typer.Option([], "--option", "-o", help="Request option KEY=VALUE (repeatable)."),
    config_file: Optional[str] = typer.Option(None, "--config", help="Service config YAML."),
    cache: Optional[bool] = typer.Option(None, "--cache/--no-cache", help="Override the configured cache flag."),
    cache_path: Optional[str] = typer.Option(None, help="Cache root directory (default: system temp dir)."),
    log_level: str = typer.Option("INFO", help="Log level."),
):
    """Synthesize TEXT and write the audio to OUT."""
    setup_logging(log_level.upper())
    if text_file:
        text = Path(text_file).read_text(encoding="utf-8")
    if text is None:
        raise typer.BadParameter("Provide TEXT or --text-file")
    options = parse_options(option)
    try:
        svc = service.TtsService(_config(config_file, cache, cache_path))
        entry = svc.synthesize(text, options)
    except TtsError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    Path(out).write_bytes(entry.data)
    typer.echo(f"{entry.request_id} {entry.mime} {len(entry.data)} bytes -> {out}")


@app.command("cache-dir")
def cache_dir(
    config_file: Optional[str] = typer.Option(None, "--config", help="Service config YAML."),
    cache_path: Optional[str] = typer.Option(None, help="Cache root directory."),
):
    """Print the cache directory, creating it if needed."""
    try:
        cfg = _config(config_file, None, cache_path)
        store = DirectoryCacheStore(service.TtsService.plugin_id, cfg.cache_path)
        directory = store.resolve_directory()
    except TtsError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo(str(directory))


@app.command("cache-clear")
def cache_clear(
    config_file: Optional[str] = typer.Option(None, "--config", help="Service config YAML."),
    cache_path: Optional[str] = typer.Option(None, help="Cache root directory."),
):
    """Delete every cached entry."""
    try:
        cfg = _config(config_file, None, cache_path)
        store = DirectoryCacheStore(service.TtsService.plugin_id, cfg.cache_path)
        n = store.clear()
    except TtsError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Removed {n} entries from {store.directory}")


def main():  # pragma: no cover
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
