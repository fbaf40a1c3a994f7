"""Display utilities for the startup screen."""

import io
import sys

import qrcode
from rich.align import Align
from rich.console import Console
from rich.table import Table

from shellrelay import __version__

# Force UTF-8 for Windows console
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")

console = Console()

LOGO = r"""
 ____  _          _ _ ____      _
/ ___|| |__   ___| | |  _ \ ___| | __ _ _   _
\___ \| '_ \ / _ \ | | |_) / _ \ |/ _` | | | |
 ___) | | | |  __/ | |  _ <  __/ | (_| | |_| |
|____/|_| |_|\___|_|_|_| \_\___|_|\__,_|\__, |
                                        |___/
"""

# Bind-all addresses are not browsable; show a usable name instead
_WILDCARD_HOSTS = {"0.0.0.0": "localhost", "::": "localhost", "": "localhost"}


def _apply_gradient(lines: list[str], colors: list[str]) -> list[str]:
    """Apply color gradient to text lines."""
    return [
        f"[{colors[min(i, len(colors) - 1)]}]{line}[/{colors[min(i, len(colors) - 1)]}]"
        for i, line in enumerate(lines)
    ]


def build_urls(host: str, port: int) -> tuple[str, str]:
    """Return the (http, websocket) URLs for a bind address."""
    display_host = _WILDCARD_HOSTS.get(host, host)
    if ":" in display_host:
        display_host = f"[{display_host}]"
    return f"http://{display_host}:{port}", f"ws://{display_host}:{port}/ws"


def get_qr_code(url: str) -> str:
    """Generate QR code as ASCII string.

    Args:
        url: URL to encode in the QR code.

    Returns:
        ASCII art representation of the QR code.
    """
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=1,
        border=1,
    )
    qr.add_data(url)
    qr.make(fit=True)

    buffer = io.StringIO()
    qr.print_ascii(out=buffer, invert=True)
    lines = [line for line in buffer.getvalue().split("\n") if line]
    return "\n".join(lines)


def display_startup_screen(host: str, port: int, config_path: str | None = None) -> None:
    """Display the startup screen with URLs and a QR code."""
    url, ws_url = build_urls(host, port)

    try:
        qr_text = get_qr_code(url)
    except Exception:
        qr_text = "[QR code unavailable]"

    logo_colored = _apply_gradient(
        LOGO.strip("\n").split("\n"),
        ["bold bright_cyan", "bright_cyan", "cyan", "bright_blue", "blue", "blue"],
    )

    left_lines = [
        *logo_colored,
        f"[dim]v{__version__}[/dim]",
        "",
        "[green]●[/green] RELAY LISTENING",
        f"[bold cyan]{url}[/bold cyan]",
        f"[cyan]{ws_url}[/cyan]",
    ]
    if config_path:
        left_lines.append(f"[dim]config: {config_path}[/dim]")
    left_lines.append("[dim]Ctrl+C to stop[/dim]")

    table = Table.grid(padding=(0, 4))
    table.add_column(justify="left", vertical="middle")
    table.add_column(justify="left", vertical="middle")
    table.add_row("\n".join(left_lines), qr_text)

    console.print()
    console.print(Align.center(table))
    console.print()
