"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer. Amount fields
are shown in token units with the raw micro-unit count alongside.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from unictl.domain.amounts import format_amount
from unictl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from unictl.services.result import ServiceResult

AMOUNT_KEYS = frozenset(
    {
        "amount",
        "balance",
        "balance_sum",
        "cap",
        "initial_supply",
        "recipient_balance",
        "remaining_supply",
        "sender_balance",
        "total_burned",
        "total_minted",
        "total_supply",
    }
)
IDENTITY_KEYS = frozenset(
    {"caller", "holder", "identity", "minter", "owner", "recipient", "sender"}
)
# Carried in data for formatting only.
_HIDDEN_KEYS = frozenset({"decimals", "symbol", "items", "issues"})


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        code = result.error.code if result.error else "UNKNOWN"
        return f"ERROR: {result.op} {code}"

    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(str(item.get("identity", "")) for item in items)
    for key in ("balance", "authorized", "minting_enabled", "healthy"):
        if key in result.data:
            return str(result.data[key])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _amount_text(value: int, data: dict[str, Any]) -> Text:
    decimals = data.get("decimals")
    if decimals is None:
        return Text(str(value), style="uni.amount")
    symbol = data.get("symbol", "")
    human = format_amount(value, int(decimals))
    return Text(f"{human} {symbol}".rstrip() + f" ({value})", style="uni.amount")


def _value_text(key: str, value: Any, data: dict[str, Any]) -> Text:
    if key in AMOUNT_KEYS and isinstance(value, int) and not isinstance(value, bool):
        return _amount_text(value, data)
    if key in IDENTITY_KEYS:
        return Text(str(value), style="uni.identity")
    if isinstance(value, bool):
        return Text(str(value).lower(), style="uni.flag.on" if value else "uni.flag.off")
    if value is None:
        return Text("-", style="dim")
    return Text(str(value))


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="uni.ok"), Text(f"  {result.op}", style="uni.op"))


def _field(console: Console, key: str, value: Any, data: dict[str, Any]) -> None:
    console.print(Text(f"  {key}: ", style="uni.key"), _value_text(key, value, data), sep="")


def _render_fields(console: Console, data: dict[str, Any]) -> None:
    for key, value in data.items():
        if key not in _HIDDEN_KEYS:
            _field(console, key, value, data)


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including the telemetry span tree (verbose only)."""
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_span(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_span(console: Console, span: dict[str, Any], indent: int) -> None:
    duration = span.get("duration_ms", 0.0)
    style = "yellow" if duration > 100 else "dim"
    console.print(f"{' ' * indent}[{style}]{duration:>8.2f}ms[/{style}]  {span.get('name', '?')}")
    for child in span.get("children", []):
        _render_span(console, child, indent + 4)


# ── Renderers ─────────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    code = err.code if err else "UNKNOWN"
    console.print(
        Text("ERROR", style="uni.error"),
        Text(f"  {result.op}", style="uni.op"),
        Text(f" [{code}] ", style="uni.error"),
        msg,
        sep="",
    )
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _render_fields(console, result.data)
    if verbose:
        _render_meta(console, result)


def _render_holders(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    _status_line(console, result)
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Identity", style="uni.identity", no_wrap=True)
    table.add_column("Balance", justify="right", style="uni.amount")
    table.add_column("Micro-units", justify="right", style="dim")
    decimals = int(data.get("decimals", 0))
    for item in data.get("items", []):
        bal = item["balance"]
        table.add_row(item["identity"], format_amount(bal, decimals), str(bal))
    console.print(table)
    _field(console, "count", data.get("count", 0), data)
    if verbose:
        _render_meta(console, result)


def _render_minters(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    _status_line(console, result)
    items = data.get("items", [])
    if not items:
        console.print(Text("  (no authorized minters)", style="dim"))
    for item in items:
        console.print(Text(f"  {item['identity']}", style="uni.identity"))
    if verbose:
        _render_meta(console, result)


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    _status_line(console, result)
    _render_fields(console, data)
    for issue in data.get("issues", []):
        console.print(Text("  issue: ", style="uni.error"), issue, sep="")
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS: dict[str, Any] = {
    "holders": _render_holders,
    "minters": _render_minters,
    "check": _render_check,
}
