"""
Command-line interface for pyvalidation.

Main Commands:
    check: Run one registry validator against a value
    bench: Run a cached validator repeatedly and report cache statistics
    rules: List the registry validators
    warmup: Precompile the locale patterns and report failures

Example Usage:
    Check a value:
        $ pyvalidation check 13812345678 --rule IsMobile

    Rules with arguments take JSON-encoded values:
        $ pyvalidation check 5 --rule Gt --arg 3 --number

    Benchmark the cache:
        $ pyvalidation bench 13812345678 13900000000 --rule IsMobile --rounds 1000 --format csv
"""

from __future__ import annotations

import sys
import time
from pathlib import Path

import click
import orjson
from rich.console import Console

from ..cache.manager import CacheManager, get_cache_manager, set_cache_manager
from ..core.config import CacheConfig, RegexCacheOptions, ValidationCacheOptions
from ..utils.error_handling import ConfigurationError, create_error_report
from ..utils.formatter import format_stats_text, render_stats_console, to_json_bytes
from ..utils.logging_config import LogFormat, LogLevel, configure_logging
from ..utils.performance_monitoring import process_memory_mb
from ..validators.functions import FUNCTION_VALIDATORS, get_validator


@click.group()
@click.option(
    "--log-level",
    type=click.Choice([level.value for level in LogLevel]),
    default=LogLevel.WARNING.value,
    help="Logging level",
)
@click.option(
    "--log-format",
    type=click.Choice([fmt.value for fmt in LogFormat]),
    default=LogFormat.SIMPLE.value,
    help="Logging format",
)
@click.option("--log-file", type=click.Path(dir_okay=False), help="Also log to this file")
def cli(log_level: str, log_format: str, log_file: str | None) -> None:
    """pyvalidation - cached validators for structured data"""
    configure_logging(
        level=LogLevel(log_level),
        format_type=LogFormat(log_format),
        log_file=Path(log_file) if log_file else None,
        enable_file=bool(log_file),
    )


def _parse_args(raw_args: tuple[str, ...]) -> list[object]:
    parsed: list[object] = []
    for raw in raw_args:
        try:
            parsed.append(orjson.loads(raw))
        except orjson.JSONDecodeError:
            parsed.append(raw)
    return parsed


def _lookup(rule: str):
    try:
        return get_validator(rule)
    except ConfigurationError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(2)


@cli.command("check")
@click.argument("value")
@click.option("--rule", required=True, help="Registry validator name, e.g. IsMobile")
@click.option("--arg", "raw_args", multiple=True, help="Extra argument (JSON), repeatable")
@click.option("--number", is_flag=True, default=False, help="Treat VALUE as a number")
@click.option(
    "--format", "fmt", type=click.Choice(["text", "json"]), default="text", help="Output format"
)
def check_cmd(value: str, rule: str, raw_args: tuple[str, ...], number: bool, fmt: str) -> None:
    validator = _lookup(rule)
    subject: object = value
    if number:
        try:
            subject = orjson.loads(value)
        except orjson.JSONDecodeError:
            click.echo(f"Error: '{value}' is not a number", err=True)
            sys.exit(2)
    args = _parse_args(raw_args)
    result = validator(subject, *args)

    if fmt == "json":
        payload = {"rule": rule, "value": subject, "args": args, "valid": result}
        sys.stdout.write(to_json_bytes(payload).decode("utf-8"))
        sys.stdout.write("\n")
    else:
        click.echo(f"{rule}({value!r}): {'valid' if result else 'invalid'}")
    sys.exit(0 if result else 1)


@cli.command("bench")
@click.argument("values", nargs=-1, required=True)
@click.option("--rule", required=True, help="Registry validator name")
@click.option("--arg", "raw_args", multiple=True, help="Extra argument (JSON), repeatable")
@click.option("--rounds", type=click.IntRange(min=1), default=100, help="Passes over VALUES")
@click.option("--cache-size", type=click.IntRange(min=1), default=None, help="Result cache size")
@click.option("--ttl", type=float, default=None, help="Result cache TTL in seconds")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["table", "text", "json", "csv"]),
    default="table",
    help="Output format",
)
def bench_cmd(
    values: tuple[str, ...],
    rule: str,
    raw_args: tuple[str, ...],
    rounds: int,
    cache_size: int | None,
    ttl: float | None,
    fmt: str,
) -> None:
    validator = _lookup(rule)
    args = _parse_args(raw_args)

    validation = ValidationCacheOptions()
    try:
        if cache_size is not None:
            validation.max_size = cache_size
        if ttl is not None:
            validation.ttl = ttl
        validation.validate()
    except ConfigurationError as e:
        click.echo(f"Error configuring caches: {e.message}", err=True)
        sys.exit(2)

    previous = set_cache_manager(CacheManager(CacheConfig(validation, RegexCacheOptions())))
    try:
        manager = get_cache_manager()
        manager.warmup()
        started = time.perf_counter()
        for _ in range(rounds):
            for value in values:
                validator(value, *args)
        elapsed_ms = (time.perf_counter() - started) * 1000.0
        stats = manager.get_all_stats()
        csv_text = manager.performance_monitor.export_to_csv()
    finally:
        set_cache_manager(previous)

    if fmt == "json":
        stats["elapsed_ms"] = elapsed_ms
        stats["memory_mb"] = process_memory_mb()
        sys.stdout.write(to_json_bytes(stats).decode("utf-8"))
        sys.stdout.write("\n")
    elif fmt == "csv":
        sys.stdout.write(csv_text)
    elif fmt == "text":
        sys.stdout.write(format_stats_text(stats))
        sys.stdout.write(f"\n# elapsed_ms={elapsed_ms:.2f}\n")
    else:
        console = Console()
        render_stats_console(stats, console, memory_mb=process_memory_mb())
        console.print(f"{rounds * len(values)} calls in {elapsed_ms:.2f} ms")


@cli.command("rules")
def rules_cmd() -> None:
    for name in sorted(FUNCTION_VALIDATORS):
        click.echo(name)


@cli.command("warmup")
def warmup_cmd() -> None:
    manager = get_cache_manager()
    collector = manager.warmup()
    stats = manager.regex_cache.get_stats()
    click.echo(f"Compiled patterns: {stats.size}")
    if collector.errors:
        click.echo(create_error_report(collector), err=True)
        sys.exit(1)


def main() -> None:
    cli(prog_name="pyvalidation")


if __name__ == "__main__":
    main()
