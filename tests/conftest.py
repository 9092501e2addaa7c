import logging
import sys
from pathlib import Path
from typing import Any, Iterator

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
if SRC.exists():
    sys.path.insert(0, str(SRC))

# Register shared Hypothesis profiles for deterministic CI runs and fast local loops.
from tests.util import hypothesis_profiles  # noqa: E402,F401  pylint: disable=unused-import

from chhash.core.maps import ChainedHashMap  # noqa: E402


@pytest.fixture(name="small_map")
def _small_map_fixture() -> ChainedHashMap[Any, Any]:
    """Four-bucket map, small enough that collisions are easy to arrange."""

    return ChainedHashMap(4)


@pytest.fixture(name="chhash_logger")
def _chhash_logger_fixture() -> Iterator[logging.Logger]:
    """Restore the ``chhash`` logger after tests that reconfigure it."""

    logger = logging.getLogger("chhash")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield logger
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate
