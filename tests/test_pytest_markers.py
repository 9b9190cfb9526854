"""The markers used to split the suite are registered."""

import pytest

pytestmark = pytest.mark.unit


def test_suite_markers_are_registered(pytestconfig):
    registered = {line.split(":")[0].strip() for line in pytestconfig.getini("markers")}
    assert {"unit", "db", "server"} <= registered
