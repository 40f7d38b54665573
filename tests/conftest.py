from pathlib import Path

import pytest


@pytest.fixture
def example():
    root = Path(__file__).resolve().parent.parent / 'examples'

    def locate(name):
        return str(root / name)

    return locate
