"""
Output formatting for cache statistics.

Renders the nested statistics returned by ``get_all_cache_stats`` as JSON
(with orjson) or as rich console tables.

Key Functions:
    to_json_bytes: Fast JSON serialization using orjson
    format_stats_text: Plain text summary
    render_stats_console: Rich tables for an interactive terminal
"""

from __future__ import annotations

from typing import Any

import orjson
from rich.console import Console
from rich.table import Table


def to_json_bytes(payload: Any) -> bytes:
    """
    Serialize ``payload`` to indented JSON bytes.

    Datetimes are written in ISO 8601; unknown objects fall back to ``str``.
    """
    return orjson.dumps(
        payload, default=str, option=orjson.OPT_INDENT_2 | orjson.OPT_NON_STR_KEYS
    )


def _cache_line(label: str, stats: dict[str, Any]) -> str:
    return (
        f"# {label}: size={stats['size']}/{stats['capacity']} hits={stats['hits']} "
        f"misses={stats['misses']} hit_rate={stats['hit_rate']:.2f}% evictions={stats['evictions']}"
    )


def format_stats_text(stats: dict[str, Any]) -> str:
    """Plain text rendering of the nested statistics mapping."""
    out = [
        _cache_line("validation", stats["validation"]),
        _cache_line("regex", stats["regex"]),
    ]
    for name, metric in stats["performance"].items():
        out.append(
            f"{name}: count={metric['count']} avg={metric['avg_time_formatted']} "
            f"total={metric['total_time_formatted']} max={metric['max_time']:.2f}ms "
            f"min={metric['min_time']:.2f}ms"
        )
    return "\n".join(out)


def build_cache_table(stats: dict[str, Any]) -> Table:
    table = Table(title="Caches")
    for column in ("cache", "size", "capacity", "hits", "misses", "hit rate", "evictions"):
        table.add_column(column, justify="left" if column == "cache" else "right")
    for label in ("validation", "regex"):
        s = stats[label]
        table.add_row(
            label,
            str(s["size"]),
            str(s["capacity"]),
            str(s["hits"]),
            str(s["misses"]),
            f"{s['hit_rate']:.2f}%",
            str(s["evictions"]),
        )
    return table


def build_hotspot_table(stats: dict[str, Any]) -> Table:
    table = Table(title="Hotspots")
    table.add_column("validator")
    table.add_column("avg (ms)", justify="right")
    table.add_column("count", justify="right")
    for spot in stats["hotspots"]:
        table.add_row(spot["name"], f"{spot['avg_time']:.4f}", str(spot["count"]))
    return table


def render_stats_console(
    stats: dict[str, Any],
    console: Console | None = None,
    memory_mb: float | None = None,
) -> None:
    """Render the statistics as rich tables."""
    if console is None:
        console = Console()
    console.print(build_cache_table(stats))
    if stats["hotspots"]:
        console.print(build_hotspot_table(stats))
    if memory_mb is not None:
        console.print(f"[dim]process memory: {memory_mb:.1f} MB[/dim]")
