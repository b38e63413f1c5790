"""HTTP endpoint accepting sensor readings and serving the latest one."""

import json
import logging
import math
import socket
from typing import Any, Optional

from aiohttp import web

from ecowatch.shared.models import Reading
from ecowatch.shared.store import LatestReadingStore
from .config import ServerConfig

logger = logging.getLogger(__name__)

STORE_KEY = web.AppKey("store", LatestReadingStore)

DATA_ROUTE = "/api/data"


def _reject_constant(name: str):
    raise ValueError(f"Non-standard JSON constant: {name}")


def _parse_finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"Number out of range: {text}")
    return value


def decode_body(raw: bytes) -> Any:
    """Decode a request body as strict JSON.

    NaN, Infinity and overflowing numbers are rejected so that whatever
    gets stored can be served back as valid JSON.

    Raises:
        ValueError: On invalid encoding or JSON.
    """
    if not raw:
        return {}
    return json.loads(raw, parse_constant=_reject_constant, parse_float=_parse_finite_float)


async def receive_data(request: web.Request) -> web.Response:
    """Store the posted reading, replacing the previous one.

    Bodies are not validated. Anything that doesn't decode to a JSON
    object is stored as an empty reading.
    """
    raw = await request.read()
    try:
        body = decode_body(raw)
    except ValueError as e:
        logger.warning(f"Could not parse request body as JSON: {e}")
        body = {}

    reading = Reading.from_dict(body)
    request.app[STORE_KEY].set(reading)

    logger.info(
        f"Received data: Temp={reading.temperature}, "
        f"Humidity={reading.humidity}, Air Quality={reading.air_quality}"
    )
    return web.Response(status=200, text="Data received")


async def latest_data(request: web.Request) -> web.Response:
    """Return the last stored reading as JSON."""
    reading = request.app[STORE_KEY].get()
    return web.json_response(reading.to_dict())


def create_app(store: Optional[LatestReadingStore] = None) -> web.Application:
    """Build the aiohttp application around a reading store."""
    app = web.Application()
    app[STORE_KEY] = store if store is not None else LatestReadingStore()
    app.router.add_post(DATA_ROUTE, receive_data)
    app.router.add_get(DATA_ROUTE, latest_data)
    return app


def get_local_ip() -> str:
    """Best guess at this machine's outbound IPv4 address."""
    s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        # No packet is sent; connect() only picks a route
        s.connect(("8.8.8.8", 80))
        return s.getsockname()[0]
    except OSError:
        return "localhost"
    finally:
        s.close()


def run_server(config: ServerConfig, store: Optional[LatestReadingStore] = None) -> None:
    """Serve the API until interrupted (blocking)."""
    app = create_app(store)
    display_host = get_local_ip() if config.host == "0.0.0.0" else config.host
    web.run_app(
        app,
        host=config.host,
        port=config.port,
        print=lambda _: logger.info(f"Server listening at http://{display_host}:{config.port}"),
    )
