"""Main FastMCP server: mounts all sub-servers."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastmcp import FastMCP

from . import tracing
from .config import get_config
from .tools.composition import composition_server
from .tools.editing import editing_server
from .tools.stream import stream_server

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(server: FastMCP):
    """Startup/shutdown hook. Flushes pending traces on exit."""
    cfg = get_config()
    logger.info(
        "Scene engine ready (fps=%d, canvas=%dx%d, transition policy=%s)",
        cfg.default_fps,
        cfg.default_width,
        cfg.default_height,
        cfg.transition_policy,
    )
    yield {}
    tracing.shutdown()
    logger.info("Lifespan shutdown complete")


app = FastMCP(
    "scene-motion",
    instructions=(
        "Motion-graphics scene engine: validate compositions, compute their "
        "timeline, render any frame to CSS-ready element styles, extract "
        "scenes from streaming model output, and edit scenes and elements."
    ),
    lifespan=_lifespan,
)

app.mount(composition_server)
app.mount(stream_server)
app.mount(editing_server)


def setup_logging() -> None:
    """Configure root logging from ``SCENE_LOG_LEVEL`` (stderr; stdout carries MCP)."""
    logging.basicConfig(
        level=get_config().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    """Entry-point for ``scene-motion-mcp`` console script."""
    setup_logging()
    tracing.setup()
    app.run()


if __name__ == "__main__":
    main()
