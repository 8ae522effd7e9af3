import pytest

HELLO = b"HELLO WORLD" * 10


@pytest.fixture
def hello():
    return HELLO


@pytest.fixture
def text_sample():
    line = b"the quick brown fox jumps over the lazy dog; the lazy dog sleeps.\n"
    return line * 40
