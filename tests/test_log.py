"""
Verbosity-gated logging tests
"""

from types import SimpleNamespace

import pytest
from loguru import logger

from menuwalk.lib.log import LOG, state_connectToLogger, state_disconnectFromLogger, state_getConnected
from menuwalk.lib.renderer import MenuRenderer
from menuwalk.lib.strategies import DropdownStrategy
from menuwalk.models.context import RenderContext


@pytest.fixture
def messages():
    captured = []
    handler = logger.add(lambda message: captured.append(message.record["message"]), level="DEBUG")
    yield captured
    logger.remove(handler)


class TestGating:
    """LOG respects the connected state's verbosity"""

    def test_levels(self, messages):
        """Messages above the connected verbosity are dropped"""
        token = state_connectToLogger(SimpleNamespace(verbosity=2))
        try:
            LOG("normal", level=1)
            LOG("verbose", level=2)
            LOG("trace", level=3)
        finally:
            state_disconnectFromLogger(token)
        assert messages == ["normal", "verbose"]

    def test_silent_without_state(self, messages):
        """Nothing is logged when no state is connected"""
        assert state_getConnected() is None
        LOG("nobody listening", level=1)
        assert messages == []

    def test_disconnect_restores_previous(self):
        """Disconnecting restores the previously connected state"""
        outer = SimpleNamespace(verbosity=1)
        inner = SimpleNamespace(verbosity=3)
        outer_token = state_connectToLogger(outer)
        inner_token = state_connectToLogger(inner)
        assert state_getConnected() is inner
        state_disconnectFromLogger(inner_token)
        assert state_getConnected() is outer
        state_disconnectFromLogger(outer_token)


class TestRenderLogging:
    """A render connects its own context for its duration"""

    def test_render_uses_renderer_verbosity(self, messages, shop_tree):
        """A render logs at its own verbosity and restores the caller's state"""
        outer = SimpleNamespace(verbosity=0)
        token = state_connectToLogger(outer)
        try:
            MenuRenderer(trees={"primary": shop_tree}, verbosity=1).render("dropdown", "primary")
            assert state_getConnected() is outer
        finally:
            state_disconnectFromLogger(token)
        assert any("Rendering 'dropdown'" in m for m in messages)

    def test_rejections_logged(self, messages):
        """Dropped nodes are reported at level 1"""
        strategy = DropdownStrategy()
        context = RenderContext(options=strategy.options, verbosity=1)
        token = state_connectToLogger(context)
        try:
            strategy.item_start([], {"ID": 1, "title": "Home"}, 0, context)
            strategy.item_start([], {"ID": 2, "title": "Lost", "menu_item_parent": 1}, 1, context)
        finally:
            state_disconnectFromLogger(token)
        assert any("node 2 dropped" in m for m in messages)
