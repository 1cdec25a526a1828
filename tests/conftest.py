import pytest
from quakeinsight.configs.settings import Settings
from quakeinsight.utils.duckdb import initialize


def make_feature(
    id="us7000abcd",
    mag=4.6,
    place="20 km WNW of Naya Bazar, India",
    time=1772178744828,
    lng=88.0455,
    lat=27.1964,
    depth=10.0,
):
    return {
        "type": "Feature",
        "id": id,
        "properties": {
            "mag": mag,
            "place": place,
            "time": time,
            "updated": time + 60000,
            "status": "reviewed",
            "type": "earthquake",
        },
        "geometry": {"type": "Point", "coordinates": [lng, lat, depth]},
    }


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else str(payload)

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


@pytest.fixture
def conn():
    conn = initialize(":memory:")
    yield conn
    conn.close()


@pytest.fixture
def feature_factory():
    return make_feature


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def settings(tmp_path):
    return Settings(database_path=str(tmp_path / "test.db"))
