"""
Forest Monitor
Full-screen terminal view of the mock forest-health dashboard using Rich.
"""

import logging
import queue
import sys
import threading
from datetime import datetime
from typing import Optional

from rich.align import Align
from rich.console import Console, Group
from rich.layout import Layout
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

from ecowatch.shared.models import Degradation, Metric
from ecowatch.simulator.forest import (
    DEGRADATION_MESSAGES,
    TREE_ICON_COUNT,
    assess_environment_health,
    format_tree_count,
)
from .dashboard import ForestDashboard, format_timestamp, timeline_labels
from .trends import MetricTrend, Trend

logger = logging.getLogger(__name__)

DEGRADATION_STYLES = {
    Degradation.LOW: "green",
    Degradation.MEDIUM: "yellow",
    Degradation.HIGH: "dark_orange",
    Degradation.CRITICAL: "red",
}

METRIC_KEYS = {
    "t": Metric.TEMPERATURE,
    "h": Metric.HUMIDITY,
    "q": Metric.AIR_QUALITY,
}

# Plain keys, or the escape sequences left/right arrows send
PREVIOUS_KEYS = {"<", ",", "p", "\x1b[d"}
NEXT_KEYS = {">", ".", "n", "\x1b[c"}
EXIT_KEYS = {"x", "exit"}

COMMAND_HELP = "r refresh | a auto refresh | t/h/q toggle metric | </> or index select | x exit"


class ForestMonitor:
    """Terminal renderer for a ForestDashboard"""

    def __init__(self, dashboard: ForestDashboard, console: Optional[Console] = None):
        self.dashboard = dashboard
        self.console = console or Console()
        self.message = ""

    def update_display(self):
        """Redraw the whole dashboard"""
        try:
            layout = self._create_layout()
            self.console.clear()
            self.console.print(layout)
        except Exception as e:
            logger.error(f"Display update failed: {e}")
            self._show_error_display(str(e))

    def run(self, poll_interval: float = 1.0, commands: Optional["queue.Queue[Optional[str]]"] = None):
        """Apply key commands and auto refresh until exit (blocking).

        Commands are read line by line from stdin on a background thread
        unless a queue is supplied. None on the queue marks end of input;
        the dashboard then keeps auto refreshing until interrupted.
        """
        if commands is None:
            commands = self._start_input_reader()

        self.update_display()
        try:
            while True:
                try:
                    command = commands.get(timeout=poll_interval)
                except queue.Empty:
                    if self.dashboard.tick():
                        self.update_display()
                    continue

                if command is None:
                    continue
                if not self.handle_command(command):
                    break
                self.dashboard.tick()
                self.update_display()
        except KeyboardInterrupt:
            logger.info("Interrupted by user")

    def handle_command(self, command: str) -> bool:
        """Apply one key command to the dashboard.

        Returns:
            False when the command asks to exit.
        """
        key = command.strip().lower()
        dashboard = self.dashboard
        self.message = ""

        if not key:
            return True
        if key in EXIT_KEYS:
            return False

        if key == "r":
            dashboard.refresh()
        elif key == "a":
            dashboard.set_auto_refresh(not dashboard.auto_refresh)
        elif key in METRIC_KEYS:
            dashboard.toggle_metric(METRIC_KEYS[key])
        elif key in PREVIOUS_KEYS:
            dashboard.select_point(max(0, dashboard.current_index - 1))
        elif key in NEXT_KEYS:
            dashboard.select_point(min(dashboard.data.last_index, dashboard.current_index + 1))
        elif key.isdigit():
            try:
                dashboard.select_point(int(key))
            except IndexError as e:
                self.message = str(e)
        else:
            self.message = f"Unknown command: {command.strip()}"

        if self.message:
            logger.warning(self.message)
        return True

    def _start_input_reader(self) -> "queue.Queue[Optional[str]]":
        commands: "queue.Queue[Optional[str]]" = queue.Queue()

        def read_lines():
            for line in sys.stdin:
                commands.put(line)
            commands.put(None)

        threading.Thread(target=read_lines, name="forest-input", daemon=True).start()
        return commands

    def _create_layout(self) -> Layout:
        layout = Layout()

        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="cards", size=6),
            Layout(name="body"),
            Layout(name="timeline", size=6),
        )
        layout["cards"].split_row(
            *[Layout(name=metric.value) for metric in Metric]
        )
        layout["body"].split_row(
            Layout(name="series", ratio=3),
            Layout(name="side", ratio=1),
        )
        layout["side"].split_column(
            Layout(name="trees", size=8),
            Layout(name="health"),
        )

        layout["header"].update(self._create_header())
        for trend in self.dashboard.metric_trends():
            layout[trend.metric.value].update(self._create_metric_card(trend))
        layout["series"].update(self._create_series_panel())
        layout["trees"].update(self._create_tree_panel())
        layout["health"].update(self._create_health_panel())
        layout["timeline"].update(self._create_timeline_panel())

        return layout

    def _create_header(self) -> Panel:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        refresh = "ON" if self.dashboard.auto_refresh else "OFF"

        header_text = Text()
        header_text.append("ECO TREND WATCHER", style="bold green")
        header_text.append(f" - {timestamp}", style="white")
        header_text.append(f" - Auto Refresh: {refresh}", style="cyan")

        return Panel(Align.center(header_text), style="green")

    def _create_metric_card(self, trend: MetricTrend) -> Panel:
        metric = trend.metric

        if trend.trend is Trend.STABLE:
            trend_style = "dim"
        elif trend.is_bad:
            trend_style = "red"
        else:
            trend_style = "green"

        value_line = Text()
        value_line.append(f"{trend.current}{metric.unit}", style="bold white")
        value_line.append(f"  {trend.trend.arrow} {trend.percent_text}", style=trend_style)

        if trend.previous is None:
            previous_line = Text("No previous sample", style="dim")
        else:
            previous_line = Text(f"From previous {trend.previous}{metric.unit}", style="dim")

        return Panel(
            Group(value_line, previous_line),
            title=metric.title,
            border_style=metric.color,
        )

    def _create_series_panel(self) -> Panel:
        series = self.dashboard.data.series
        active = [metric for metric in Metric if metric in self.dashboard.active_metrics]

        table = Table(show_header=True, header_style="bold", box=None)
        table.add_column("Time", style="white", width=6)
        for metric in active:
            table.add_column(f"{metric.title} ({metric.unit})", style=metric.color, justify="right")

        for i, ts in enumerate(series.timestamps):
            row = [format_timestamp(ts)] + [f"{series.value_at(metric, i):.1f}" for metric in active]
            style = "reverse" if i == self.dashboard.current_index else None
            table.add_row(*row, style=style)

        return Panel(table, title="ENVIRONMENTAL TRENDS", style="cyan")

    def _create_tree_panel(self) -> Panel:
        data = self.dashboard.data
        style = DEGRADATION_STYLES[data.degradation]

        content = Text(justify="center")
        content.append(" ".join("🌳" * TREE_ICON_COUNT[data.degradation]) + "\n")
        content.append(format_tree_count(data.tree_count) + "\n", style="bold white")
        content.append(DEGRADATION_MESSAGES[data.degradation], style=f"bold {style}")

        return Panel(Align.center(content), title="TREE POPULATION", style=style)

    def _create_health_panel(self) -> Panel:
        table = Table(show_header=False, box=None)
        table.add_column("Indicator", style="white")
        table.add_column("Status", justify="right")

        indicators = assess_environment_health(self.dashboard.data, self.dashboard.current_index)
        for indicator in indicators:
            style = "yellow" if indicator.warning else "green"
            table.add_row(indicator.name, Text(indicator.label, style=style))
            table.add_row(
                ProgressBar(total=100, completed=min(indicator.percent, 100), width=20,
                            complete_style=style),
                "",
            )

        return Panel(table, title="ENVIRONMENT HEALTH", style="cyan")

    def _create_timeline_panel(self) -> Panel:
        points = Text()
        labels = Text()
        current = self.dashboard.current_index

        for i, label in timeline_labels(self.dashboard.data.series.timestamps):
            marker = "●" if i == current else "○"
            points.append(f"{marker:<6}", style="bold green" if i == current else "dim")
            labels.append(f"{label or '':<6}", style="dim")

        footer = Text(f"Current: {format_timestamp(self.dashboard.current_timestamp)}", style="white")
        if self.message:
            hint = Text(self.message, style="yellow")
        else:
            hint = Text(COMMAND_HELP, style="dim")

        return Panel(Group(points, labels, footer, hint), title="TIME SERIES DATA", style="cyan")

    def _show_error_display(self, error_msg: str):
        """Show error display when rendering fails"""
        try:
            self.console.clear()
            self.console.print(Panel(
                Align.center(Text(f"DISPLAY ERROR\n\n{error_msg}", style="bold red")),
                title="System Error",
                style="red",
            ))
        except Exception as e:
            logger.error(f"Failed to show error display: {e}")
