import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Select the config overlay before any domain module is imported."""
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ["ORDERBOARD_HANDOFF"] = "fake"


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)


@pytest.fixture(autouse=True)
def reset_adapters():
    """Give every test a fresh change channel, hand-off adapter and auth gate."""
    from ordering.handoff import reset_handoff
    from ordering.realtime.channel import reset_change_channel
    from ordering.staff import reset_auth_gate

    reset_change_channel()
    reset_handoff()
    reset_auth_gate()
    yield
    reset_change_channel()
    reset_handoff()
    reset_auth_gate()
