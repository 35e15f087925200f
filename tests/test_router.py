"""Tests for sonar/router.py"""

from sonar import router
from sonar.models import Classification, Product, Radar, Reproducibility


def test_read_route():
    route = router.read(123)
    assert route.method == "GET"
    assert route.path == "/api/radar"
    assert route.params == {"number": 123}
    assert route.data == {}


def test_create_route():
    radar = Radar(
        id=42,
        classification=Classification.CRASH,
        product=Product.WATCHOS,
        reproducibility=Reproducibility.UNABLE,
        title="Watch reboots",
        description="It reboots",
        steps="Raise wrist",
        expected="Nothing",
        actual="Reboot",
        configuration="Series 9",
        version="10.1",
        notes="",
    )
    route = router.create(radar)
    assert route.method == "POST"
    assert route.path == "/api/radars/add"
    assert route.data["number"] == 42
    assert route.data["classification"] == "Crash/Hang/Data Loss"
    assert route.data["product"] == "watchOS"
    assert route.data["reproducible"] == "Unable"
    assert route.data["product_version"] == "10.1"
    assert route.data["status"] == "Open"
    assert "Summary:\nIt reboots" in route.data["description"]
