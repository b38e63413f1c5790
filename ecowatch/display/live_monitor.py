"""
Live Monitor
Terminal view of the latest reading held by the ingestion server.
"""

import asyncio
import logging
from typing import Any, Optional

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ecowatch.shared.models import MISSING, Metric, Reading
from .config import DisplayConfig
from .data_fetcher import LiveDataFetcher

logger = logging.getLogger(__name__)

LOADING_TEXT = "Loading data..."


def format_value(value: Any) -> str:
    """Render a reading field the way it arrived.

    Fields the sensor never sent show as undefined, explicit nulls as null.
    """
    if value is MISSING:
        return "undefined"
    if value is None:
        return "null"
    return str(value)


class LiveMonitor:
    """Polls the server and redraws the latest reading"""

    def __init__(self, config: DisplayConfig, console: Optional[Console] = None):
        self.config = config
        self.console = console or Console()

    def render(self, reading: Optional[Reading]) -> Panel:
        """Build the dashboard for a reading, or the loading view if there is none"""
        if reading is None:
            body = Align.center(Text(LOADING_TEXT, style="dim"))
        else:
            table = Table(show_header=False, box=None)
            table.add_column("Metric", style="bold cyan", width=14)
            table.add_column("Value", style="white")
            for metric in Metric:
                table.add_row(
                    f"{metric.title}:",
                    Text(f"{format_value(reading.get(metric))} {metric.unit}"),
                )
            body = table

        return Panel(body, title="Environmental Data Dashboard", style="cyan")

    def update_display(self, reading: Optional[Reading]):
        """Redraw the screen"""
        try:
            panel = self.render(reading)
            self.console.clear()
            self.console.print(panel)
        except Exception as e:
            logger.error(f"Display update failed: {e}")
            self.console.print(Text(f"DISPLAY ERROR: {e}", style="bold red"))

    async def run(self, fetcher: Optional[LiveDataFetcher] = None):
        """Fetch and redraw until interrupted; a zero poll interval fetches once"""
        if fetcher is None:
            fetcher = LiveDataFetcher(self.config.server_url, timeout=self.config.request_timeout)

        async with fetcher:
            self.update_display(fetcher.latest)
            while True:
                await fetcher.fetch()
                self.update_display(fetcher.latest)
                if fetcher.last_successful_fetch:
                    stamp = fetcher.last_successful_fetch.strftime("%H:%M:%S")
                    self.console.print(Text(f"Last update: {stamp}", style="dim"))

                if self.config.poll_interval <= 0:
                    break
                await asyncio.sleep(self.config.poll_interval)
