"""
Terminal utilities for CLI output with a persistent footer.

Provides clean, organized output while a demo streams commands:
- Main log area (scrolling content)
- Persistent footer line (connection status / progress)
"""

import threading
from rich.console import Console
from rich.live import Live
from rich.table import Table


class TerminalDisplay:
    """
    Manages terminal display with a persistent footer line.

    This creates a two-section display:
    1. Main content area (scrolls normally)
    2. Footer line (stays at bottom, updates in-place)
    """

    def __init__(self, enable_footer: bool = True, console: Console | None = None):
        """
        Initialize terminal display.

        Args:
            enable_footer: Whether to enable the persistent footer
            console: Rich console to draw on (default: stdout)
        """
        self.enable_footer = enable_footer
        self.lock = threading.Lock()

        self.console = console if console is not None else Console()
        self.live_display: Live | None = None

        # Footer state
        self.endpoint_status = {}  # {endpoint: connected_bool}
        self.footer_text = ""

    def print(self, message: str, prefix: str = ""):
        """
        Print a message to the main content area.

        Args:
            message: Message to print
            prefix: Optional prefix (e.g., "[Meshcat]")
        """
        text = f"{prefix} {message}" if prefix else message
        self.console.print(text, highlight=False, markup=False)

    def init_footer(self):
        """Initialize Rich live footer display."""
        if not self.enable_footer or self.live_display is not None:
            return

        with self.lock:
            self.live_display = Live(
                self._generate_footer_table(),
                console=self.console,
                refresh_per_second=4,
                vertical_overflow="visible"
            )
            self.live_display.start()

    def _generate_footer_table(self) -> Table:
        """Generate footer table showing connection status and progress."""
        table = Table.grid(padding=(0, 2))
        table.add_column(style="cyan", no_wrap=True)
        table.add_column(style="yellow", no_wrap=True)

        status_items = []
        for endpoint, connected in sorted(self.endpoint_status.items()):
            status = (
                "[bold green]● CONNECTED[/bold green]" if connected
                else "[bold dim]○ WAITING[/bold dim]"
            )
            status_items.append(f"[bold]{endpoint}:[/bold] {status}")

        if not status_items:
            status_items.append("[dim]No meshcat server configured[/dim]")

        table.add_row(" ".join(status_items), self.footer_text)
        return table

    def update_footer(self, endpoint_status: dict | None = None, text: str | None = None):
        """
        Update the persistent footer line.

        Args:
            endpoint_status: Dictionary mapping endpoints to connection status
            text: Progress text shown next to the status
        """
        with self.lock:
            if endpoint_status is not None:
                self.endpoint_status.update(endpoint_status)
            if text is not None:
                self.footer_text = text

            if self.enable_footer and self.live_display is not None:
                self.live_display.update(self._generate_footer_table())

    def clear_footer(self):
        """Clear the footer line."""
        if not self.enable_footer:
            return

        with self.lock:
            if self.live_display is not None:
                try:
                    self.live_display.stop()
                finally:
                    self.live_display = None

    def __enter__(self):
        """Context manager entry."""
        self.init_footer()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - cleanup."""
        self.clear_footer()


def create_progress_bar(current: int, total: int, width: int = 30) -> str:
    """
    Create a progress bar string.

    Args:
        current: Current progress value
        total: Total/max value
        width: Width of the progress bar in characters

    Returns:
        Progress bar string like: [===========>          ]  50%
    """
    if total == 0:
        percent = 0
    else:
        percent = min(100, int(100 * current / total))

    filled = int(width * current / total) if total > 0 else 0
    filled = min(filled, width)

    bar = "=" * filled + ">" if filled < width else "=" * width
    bar = bar.ljust(width)

    return f"[{bar}] {percent:3d}%"


def format_channel_stats(stats: dict, extra_info: str = "") -> str:
    """
    Format channel statistics for footer display.

    Args:
        stats: Output of ZMQCommandChannel.get_stats()
        extra_info: Additional information to display

    Returns:
        Formatted stats string
    """
    base = (
        f"Sent: {stats.get('commands_sent', 0):6d} | "
        f"Retries: {stats.get('retries', 0):3d} | "
        f"Timeouts: {stats.get('timeouts', 0):3d}"
    )
    if extra_info:
        base += f" | {extra_info}"
    return base
