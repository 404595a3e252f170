"""Command line interface for running catprobe sessions."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer

from catprobe import CatProbeError, ProbeConfig, TokenTransport, Worker, load_config
from catprobe.security import build_token, encode_token

app = typer.Typer(help="CLI for probing CAT protected streams")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """catprobe CLI entry point."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _resolve_config(
    config_path: Optional[Path],
    key: Optional[str],
    ttl: Optional[int],
    token_type: Optional[TokenTransport],
    issuer: Optional[str],
) -> ProbeConfig:
    config = load_config(str(config_path) if config_path else None)
    if key is not None:
        config.token.key = key
    if ttl is not None:
        config.token.ttl = ttl
    if token_type is not None:
        config.token.token_type = token_type
    if issuer is not None:
        config.token.issuer = issuer
    return config


async def _run_worker(worker: Worker) -> None:
    async with worker:
        await worker.run()


@app.command("run")
def run(
    url: str = typer.Option(..., "--url", "-u", help="m3u8 url that returns stream segments"),
    key: Optional[str] = typer.Option(None, "--key", "-k", help="Hex encoded signing key"),
    ttl: Optional[int] = typer.Option(
        None, "--ttl", help="Renewal ttl in seconds, token expiry is twice the ttl"
    ),
    token_type: Optional[TokenTransport] = typer.Option(
        None, "--token-type", "-t", help="How the token is sent"
    ),
    issuer: Optional[str] = typer.Option(None, "--issuer", "-i", help="Token issuer"),
    max_iterations: Optional[int] = typer.Option(
        None, "--max-iterations", "-m", help="Number of times to fetch the segment"
    ),
    sleep: Optional[int] = typer.Option(
        None, "--sleep", help="Time in ms to sleep between segment fetches"
    ),
    strict_content_length: bool = typer.Option(
        False, "--strict-content-length", help="Fail on segments without content-length"
    ),
    config_path: Optional[Path] = typer.Option(None, "--config", help="YAML config file"),
) -> None:
    """
    Fetch a playlist and poll its first segment with a Common Access Token.

    Example:
        catprobe run --url https://cdn.example.com/live/index.m3u8
        catprobe run -u https://cdn.example.com/live/index.m3u8 -t header -m 10 --sleep 2000
    """
    config = _resolve_config(config_path, key, ttl, token_type, issuer)
    if max_iterations is not None:
        config.session.max_iterations = max_iterations
    if sleep is not None:
        config.session.sleep = sleep
    if strict_content_length:
        config.session.strict_content_length = True

    try:
        worker = Worker.from_config(url, config)
        asyncio.run(_run_worker(worker))
    except CatProbeError as exc:
        typer.secho(f"Worker failed: {exc}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    typer.echo("Worker completed all requests")


@app.command("token")
def token(
    key: Optional[str] = typer.Option(None, "--key", "-k", help="Hex encoded signing key"),
    ttl: Optional[int] = typer.Option(None, "--ttl", help="Renewal ttl in seconds"),
    token_type: Optional[TokenTransport] = typer.Option(
        None, "--token-type", "-t", help="Renewal policy to embed"
    ),
    issuer: Optional[str] = typer.Option(None, "--issuer", "-i", help="Token issuer"),
    domain: Optional[str] = typer.Option(
        None, "--domain", "-d", help="Cookie domain, required for cookie tokens"
    ),
    config_path: Optional[Path] = typer.Option(None, "--config", help="YAML config file"),
) -> None:
    """Print a freshly signed token, e.g. for pasting into an online checker."""
    config = _resolve_config(config_path, key, ttl, token_type, issuer)
    try:
        token_bytes = build_token(
            config.token.key,
            config.token.ttl,
            config.token.token_type,
            domain,
            config.token.issuer,
        )
    except CatProbeError as exc:
        typer.secho(f"Could not build token: {exc}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    typer.echo(encode_token(token_bytes))


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    app()
