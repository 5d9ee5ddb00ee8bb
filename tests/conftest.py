"""
Pytest configuration for starkcore tests.
"""

import sys
from pathlib import Path
from typing import List

import pytest

# Add the project root to the path so absolute imports work without installing
project_dir = Path(__file__).parent.parent
if str(project_dir) not in sys.path:
    sys.path.insert(0, str(project_dir))

from starkcore.field import FieldElement  # noqa: E402

FIBONACCI_SQUARE_LENGTH = 1023


def fibonacci_square_trace(length: int = FIBONACCI_SQUARE_LENGTH) -> List[FieldElement]:
    """a[0] = 1, a[1] = 3141592, a[i+2] = a[i+1]^2 + a[i]^2."""
    trace = [FieldElement(1), FieldElement(3141592)]
    while len(trace) < length:
        trace.append(trace[-2] * trace[-2] + trace[-1] * trace[-1])
    return trace


@pytest.fixture(scope="session")
def fibsq_trace() -> List[FieldElement]:
    return fibonacci_square_trace()
