"""Shared test fixtures for scene-motion-mcp."""

from __future__ import annotations

from typing import Any

import pytest


def unwrap_tool(tool: Any) -> Any:
    """Extract the raw coroutine from a FastMCP FunctionTool, if wrapped.

    FastMCP 2.x wraps @server.tool functions in FunctionTool (not callable).
    FastMCP 3.x preserves the original function. This helper works with both.
    """
    return getattr(tool, "fn", tool)


@pytest.fixture(autouse=True, scope="session")
def _unwrap_fastmcp_tools():
    """Patch tool modules so FunctionTool objects become directly callable."""
    import importlib
    import pkgutil

    import scene_motion_mcp.tools as tools_pkg

    modules = []
    for info in pkgutil.walk_packages(tools_pkg.__path__, tools_pkg.__name__ + "."):
        try:
            modules.append(importlib.import_module(info.name))
        except Exception:
            pass

    for mod in modules:
        for name in list(vars(mod)):
            obj = getattr(mod, name, None)
            if obj is not None and hasattr(obj, "fn") and not callable(obj):
                setattr(mod, name, obj.fn)


@pytest.fixture(autouse=True)
def _disable_tracing(monkeypatch):
    """Disable MLflow tracing in all tests to avoid real tracking-server calls."""
    monkeypatch.setenv("SCENE_TRACING_ENABLED", "false")


@pytest.fixture(autouse=True)
def _isolate_dotenv(tmp_path, monkeypatch):
    """Prevent tests from loading the user's real ~/.config/scene-motion-mcp/.env."""
    monkeypatch.setattr(
        "scene_motion_mcp.dotenv.DEFAULT_ENV_PATH",
        tmp_path / "nonexistent.env",
    )


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Reset the config singleton and scene env vars between tests."""
    import scene_motion_mcp.config as cfg_mod

    for var in (
        "SCENE_DEFAULT_FPS",
        "SCENE_DEFAULT_WIDTH",
        "SCENE_DEFAULT_HEIGHT",
        "SCENE_ANIMATION_FRAMES",
        "SCENE_TRANSITION_POLICY",
        "SCENE_LOG_LEVEL",
        "MLFLOW_TRACKING_URI",
    ):
        monkeypatch.delenv(var, raising=False)
    cfg_mod._config = None
    yield
    cfg_mod._config = None


def make_scene(scene_id: str, duration: int, *, transition: int | None = None, elements=None, **extra) -> dict:
    """Build a camelCase scene dict."""
    scene: dict = {
        "id": scene_id,
        "durationInFrames": duration,
        "background": {"type": "solid", "color": "#111111"},
        "elements": list(elements or []),
    }
    if transition is not None:
        scene["transition"] = {"type": "fade", "durationInFrames": transition}
    scene.update(extra)
    return scene


def make_text(element_id: str = "title", **extra) -> dict:
    """Build a camelCase text element dict centred on the canvas."""
    element: dict = {"id": element_id, "type": "text", "x": 50, "y": 50, "text": "Hello"}
    element.update(extra)
    return element


@pytest.fixture()
def sample_composition() -> dict:
    """Three scenes (60/90/60 frames) joined by 15- and 20-frame transitions."""
    return {
        "meta": {"title": "Demo", "width": 1920, "height": 1080, "fps": 30},
        "scenes": [
            make_scene(
                "intro",
                60,
                transition=15,
                elements=[
                    make_text("title", text="Welcome", enterAnimation={"type": "fade", "durationInFrames": 20}),
                    {"id": "bar", "type": "shape", "shape": "rectangle", "x": 50, "y": 80, "width": 60, "height": 2},
                ],
            ),
            make_scene("middle", 90, transition=20, elements=[make_text("body", text="Body")]),
            make_scene(
                "outro",
                60,
                elements=[{"id": "logo", "type": "image", "src": "https://example.com/logo.png", "x": 50, "y": 50}],
            ),
        ],
    }
