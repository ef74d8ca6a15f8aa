from pathlib import Path

import pytest
from hypothesis import HealthCheck, settings

# Autouse environment isolation is function scoped; it does not vary per example
settings.register_profile(
    "gitscribe", suppress_health_check=[HealthCheck.function_scoped_fixture]
)
settings.load_profile("gitscribe")


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if Path(item.path).is_relative_to(Path(__file__).parent):
            item.add_marker(pytest.mark.property)
