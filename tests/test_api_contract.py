from fastapi.testclient import TestClient

from gamesearch.api import app
from gamesearch import catalog_client
from gamesearch.catalog_client import CatalogUnavailableError, parse_game_details
from gamesearch.config import Candidate, GameDetails


client = TestClient(app)


def fake_search(query, client=None):
    return [
        Candidate(id="926", name="Catan: Seafarers", year="1997"),
        Candidate(id="13", name="Catan", year="1995"),
        Candidate(id="2807", name="Catan Junior"),
    ]


def failing_lookup(*args, **kwargs):
    raise CatalogUnavailableError("catalog down")


def test_health_endpoint():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy"}


def test_search_returns_ranked_results(monkeypatch):
    monkeypatch.setattr("gamesearch.api.search_catalog", fake_search)

    resp = client.get("/bgg/search", params={"q": "catan"})
    assert resp.status_code == 200
    data = resp.json()
    assert [d["name"] for d in data] == ["Catan", "Catan: Seafarers", "Catan Junior"]
    assert data[0] == {"id": "13", "name": "Catan", "year": "1995", "relevanceScore": 1920}
    # missing year is omitted rather than null
    assert "year" not in data[2]


def test_search_short_query_skips_catalog(monkeypatch):
    calls = []

    def spy(query, client=None):
        calls.append(query)
        return []

    monkeypatch.setattr("gamesearch.api.search_catalog", spy)

    for q in ["", "c", "  c  "]:
        resp = client.get("/bgg/search", params={"q": q})
        assert resp.status_code == 200
        assert resp.json() == []
    assert client.get("/bgg/search").json() == []
    assert calls == []


def test_search_falls_back_when_catalog_down(monkeypatch):
    monkeypatch.setattr("gamesearch.api.search_catalog", failing_lookup)

    resp = client.get("/bgg/search", params={"q": "catan"})
    assert resp.status_code == 200
    assert [d["name"] for d in resp.json()] == ["Catan", "Settlers of Catan"]


def test_search_caps_results_at_ten(monkeypatch):
    many = [Candidate(id=str(i), name=f"Pandemic Scenario {i}") for i in range(25)]
    monkeypatch.setattr("gamesearch.api.search_catalog", lambda query, client=None: many)

    resp = client.get("/bgg/search", params={"q": "pandemic"})
    assert len(resp.json()) == 10


def test_details_requires_id():
    resp = client.get("/bgg/details")
    assert resp.status_code == 400


def test_details_from_catalog(monkeypatch):
    def fake_details(game_id, client=None):
        return GameDetails(
            id=game_id,
            name="Catan",
            complexity=2.3,
            min_playing_time=60,
            max_playing_time=120,
            min_players=3,
            max_players=4,
        )

    monkeypatch.setattr("gamesearch.api.fetch_game_details", fake_details)

    resp = client.get("/bgg/details", params={"id": "13"})
    assert resp.status_code == 200
    assert resp.json() == {
        "id": "13",
        "name": "Catan",
        "complexity": 2.3,
        "minPlayingTime": 60,
        "maxPlayingTime": 120,
        "minPlayers": 3,
        "maxPlayers": 4,
    }


def test_details_falls_back_when_catalog_down(monkeypatch):
    monkeypatch.setattr("gamesearch.api.fetch_game_details", failing_lookup)

    resp = client.get("/bgg/details", params={"id": "7"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["name"] == "7 Wonders"
    assert data["maxPlayers"] == 7


def test_details_unknown_game(monkeypatch):
    monkeypatch.setattr("gamesearch.api.fetch_game_details", lambda game_id, client=None: None)

    resp = client.get("/bgg/details", params={"id": "999999"})
    assert resp.status_code == 404


NAN_STATS_XML = """<items><item type="boardgame" id="7">
  <name type="primary" value="7 Wonders"/>
  <minplaytime value="1e400"/>
  <maxplaytime value="30"/>
  <minplayers value="3"/>
  <maxplayers value="7"/>
  <statistics><ratings><averageweight value="nan"/></ratings></statistics>
</item></items>"""


def test_details_with_malformed_numbers_still_answers(monkeypatch):
    monkeypatch.setattr(
        "gamesearch.api.fetch_game_details",
        lambda game_id, client=None: parse_game_details(NAN_STATS_XML),
    )

    resp = client.get("/bgg/details", params={"id": "7"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["complexity"] == 0.0
    assert data["minPlayingTime"] == 0
    assert data["maxPlayingTime"] == 30


def test_details_unusable_catalog_record_uses_fallback(monkeypatch):
    def reject(row):
        raise ValueError("bad row")

    monkeypatch.setattr(catalog_client, "to_game_details", reject)
    monkeypatch.setattr(
        "gamesearch.api.fetch_game_details",
        lambda game_id, client=None: catalog_client.parse_game_details(NAN_STATS_XML),
    )

    resp = client.get("/bgg/details", params={"id": "7"})
    assert resp.status_code == 200
    assert resp.json()["name"] == "7 Wonders"
    assert resp.json()["maxPlayers"] == 7
