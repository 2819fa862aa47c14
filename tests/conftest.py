import pytest

from loguru import logger

from docklayout.layout import DockPane, Panel, Rect


@pytest.fixture
def caplog(caplog):
    """
    Route loguru records into pytest's caplog.
    """
    handler_id = logger.add(
        caplog.handler,
        format="{message}",
        level=0,
        filter=lambda record: record["level"].no >= caplog.handler.level,
        enqueue=False,
    )
    yield caplog
    logger.remove(handler_id)


@pytest.fixture
def surface():
    return Rect(0, 0, 800, 600)


@pytest.fixture
def pane(surface):
    """Empty dock pane laid out over an 800x600 surface."""
    return DockPane(surface=surface)


@pytest.fixture
def panels():
    """Factory for named panels with preferred sizes."""
    def make(*titles, width=100.0, height=100.0):
        return [Panel(title, pref_width=width, pref_height=height) for title in titles]
    return make
