import logging
import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'compositor' and tests/helpers importable as 'helpers'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from compositor.core.composition import Compositor  # noqa: E402
from helpers.resolvers import CountingResolver  # noqa: E402

ROLE_PREFIXES = {"": "helpers.roles.", "=": ""}


@pytest.fixture(autouse=True)
def _no_compositor_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep COMPOSITOR_* overrides from the developer's shell out of tests."""
    for key in list(os.environ):
        if key.startswith("COMPOSITOR_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def _reset_compositor_logging():
    """Drop handlers the CLI installed so they do not outlive captured streams."""
    yield
    logger = logging.getLogger("compositor")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def resolver() -> CountingResolver:
    return CountingResolver()


@pytest.fixture
def compositor(resolver: CountingResolver) -> Compositor:
    return Compositor("App", prefix_map=ROLE_PREFIXES, resolver=resolver)
