"""Terminal dashboards."""

from .data_fetcher import LiveDataFetcher
from .dashboard import ForestDashboard
from .forest_monitor import ForestMonitor
from .live_monitor import LiveMonitor


def live_main():
    """Entry point for the live reading dashboard."""
    import asyncio

    from .config import load_config
    from ecowatch.shared.logging import setup_logging

    config = load_config()
    setup_logging(config.log_level)

    monitor = LiveMonitor(config)
    try:
        asyncio.run(monitor.run())
    except KeyboardInterrupt:
        pass


def forest_main():
    """Entry point for the mock forest-health dashboard."""
    from .config import load_config
    from ecowatch.shared.logging import setup_logging
    from ecowatch.simulator.generator import SampleGenerator

    config = load_config()
    setup_logging(config.log_level)

    dashboard = ForestDashboard(
        SampleGenerator(seed=config.seed),
        auto_refresh=config.auto_refresh,
        refresh_interval=config.refresh_interval,
    )
    ForestMonitor(dashboard).run()


__all__ = ["LiveDataFetcher", "ForestDashboard", "ForestMonitor", "LiveMonitor", "live_main", "forest_main"]
