import pytest

from reden.base.tracing import Tracer, get_default_tracer, set_default_tracer
from reden.core.delimiters import reset_global_delimiters
from reden.core.renderer import get_default_renderer, set_default_renderer


@pytest.fixture(autouse=True)
def isolated_defaults():
    """Keep process-wide defaults from leaking between tests."""
    tracer = get_default_tracer()
    renderer = get_default_renderer()
    reset_global_delimiters()
    set_default_tracer(Tracer([]))
    yield
    reset_global_delimiters()
    set_default_tracer(tracer)
    set_default_renderer(renderer)
