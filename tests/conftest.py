import os
import sys
from concurrent.futures import Executor, Future
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

FIXTURES = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture(scope="session")
def qapp():
    """Provide a headless QApplication; fonts and images need one."""

    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture()
def fixture_path() -> Path:
    return FIXTURES / "reviews_page.json"


class InlineExecutor(Executor):
    """Run submitted work immediately on the calling thread."""

    def __init__(self) -> None:
        self.submitted = 0

    def submit(self, fn, /, *args, **kwargs):
        self.submitted += 1
        future: Future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except BaseException as exc:
            future.set_exception(exc)
        return future


class DeferredExecutor(Executor):
    """Queue submitted work until the test calls :meth:`run_next`."""

    def __init__(self) -> None:
        self.queue: list[tuple[Future, object, tuple, dict]] = []

    def submit(self, fn, /, *args, **kwargs):
        future: Future = Future()
        self.queue.append((future, fn, args, kwargs))
        return future

    def run_next(self) -> None:
        future, fn, args, kwargs = self.queue.pop(0)
        try:
            future.set_result(fn(*args, **kwargs))
        except BaseException as exc:
            future.set_exception(exc)


@pytest.fixture()
def inline_executor() -> InlineExecutor:
    return InlineExecutor()


@pytest.fixture()
def deferred_executor() -> DeferredExecutor:
    return DeferredExecutor()


@pytest.fixture()
def png_bytes() -> bytes:
    """A tiny 4x4 PNG encoded with Pillow."""

    from io import BytesIO

    from PIL import Image

    buffer = BytesIO()
    Image.new("RGBA", (4, 4), (200, 40, 40, 255)).save(buffer, format="PNG")
    return buffer.getvalue()
