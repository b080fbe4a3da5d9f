import pytest


def pytest_configure(config):
    config.addinivalue_line('markers', 'online: test requires internet access')


@pytest.fixture
def tile_png():
    from mapview.test.image import create_tile_png
    return create_tile_png()
