import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from mockdraft.api import create_app
from mockdraft.config import GameSettings, get_season
from mockdraft.persistence import DraftStore
from mockdraft.rankings import StaticSourceCatalog


INTERVAL_SECONDS = 30.0
ADMIN = {"X-Admin-Secret": "letmein"}


class FakeClock:
    def __init__(self, now: int = 1_700_000_000_000):
        self.now = now

    def __call__(self) -> int:
        return self.now


def _feed_payload() -> dict:
    return {
        "items": [
            {
                "round": 1,
                "pick": 1,
                "athlete": {"displayName": "Fernando Mendoza"},
                "team": {"displayName": "Las Vegas Raiders"},
            },
            {
                "round": 1,
                "pick": 2,
                "athlete": {"displayName": "Arvell Reese"},
                "team": {"displayName": "New York Jets"},
            },
        ]
    }


@pytest.fixture
async def client(tmp_path):
    feed = {"status": 200}

    def handler(request: httpx.Request) -> httpx.Response:
        if feed["status"] != 200:
            return httpx.Response(feed["status"])
        return httpx.Response(200, json=_feed_payload())

    settings = GameSettings(
        current_year=2026,
        reveal_interval_seconds=INTERVAL_SECONDS,
        admin_secret="letmein",
        db_path=str(tmp_path / "api.sqlite"),
        live_results_url="https://feed.example/{year}/picks",
    )
    clock = FakeClock()
    live_client = httpx.Client(transport=httpx.MockTransport(handler))
    app = create_app(
        DraftStore(tmp_path / "api.sqlite"),
        settings=settings,
        clock=clock,
        catalog=StaticSourceCatalog(),
        live_client=live_client,
    )
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        async_client.app = app
        async_client.clock = clock
        async_client.feed = feed
        yield async_client
    live_client.close()


def _mock_slate(*, double_slot: int = 12) -> list[dict]:
    return [
        {
            "slot_number": slot,
            "player_name": name,
            "position": position,
            "double_score_pick": slot == double_slot,
        }
        for slot, (name, _team, position) in enumerate(get_season(2026).simulated_order, start=1)
    ]


def _participant(name: str) -> dict[str, str]:
    return {"X-Participant-Id": name, "X-Participant-Name": name.title()}


@pytest.mark.anyio
async def test_health(client: AsyncClient):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


@pytest.mark.anyio
async def test_players_board_views(client: AsyncClient):
    resp = await client.get("/draft/2026/players")
    assert resp.status_code == 200
    players = resp.json()["players"]
    assert players[0]["name"] == "Fernando Mendoza"
    assert len(players) == 200

    rrf = await client.get("/draft/2026/players", params={"source": "rrf"})
    assert rrf.status_code == 200
    assert rrf.json()["players"][0]["name"] == "Fernando Mendoza"

    qbs = await client.get("/draft/2026/players", params={"source": "avg", "position": "qb"})
    assert qbs.status_code == 200
    assert qbs.json()["players"]
    assert {player["position"] for player in qbs.json()["players"]} == {"QB"}

    bad = await client.get("/draft/2026/players", params={"source": "nowhere"})
    assert bad.status_code == 400


@pytest.mark.anyio
async def test_players_export_csv(client: AsyncClient):
    resp = await client.get("/draft/2026/players/export.csv", params={"source": "cbs"})
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    lines = resp.text.splitlines()
    assert lines[0] == "rank,name,school,position,score,appearances"
    assert lines[1].startswith("1,Fernando Mendoza,Indiana,QB")


@pytest.mark.anyio
async def test_year_outside_range_is_404(client: AsyncClient):
    assert (await client.get("/draft/2019/players")).status_code == 404
    assert (await client.get("/draft/2041/leaderboard")).status_code == 404


@pytest.mark.anyio
async def test_picks_require_participant_header(client: AsyncClient):
    resp = await client.post("/draft/2026/picks", json={"picks": []})
    assert resp.status_code == 401


@pytest.mark.anyio
async def test_submitted_slate_is_sanitized(client: AsyncClient):
    slate = _mock_slate()
    slate[4]["double_score_pick"] = True
    slate[19]["double_score_pick"] = True
    slate.append({"slot_number": 40, "player_name": "Nobody"})

    resp = await client.post("/draft/2026/picks", json={"picks": slate}, headers=_participant("alice"))
    assert resp.status_code == 200
    body = resp.json()
    assert body["complete"] is True
    assert body["locked"] is False
    flagged = [pick["slot_number"] for pick in body["picks"] if pick["double_score_pick"]]
    assert flagged == [12]
    assert body["picks"][0]["team_name"] == "Las Vegas Raiders"
    assert len(body["picks"]) == 32

    fetched = await client.get("/draft/2026/picks", headers=_participant("alice"))
    assert fetched.json()["picks"] == body["picks"]


@pytest.mark.anyio
async def test_clear_pick(client: AsyncClient):
    headers = _participant("bob")
    await client.post("/draft/2026/picks", json={"picks": _mock_slate()[:3]}, headers=headers)

    resp = await client.delete("/draft/2026/picks/2", headers=headers)
    assert resp.status_code == 200
    assert [pick["slot_number"] for pick in resp.json()["picks"]] == [1, 3]

    assert (await client.delete("/draft/2026/picks/2", headers=headers)).status_code == 404
    assert (await client.delete("/draft/2026/picks/33", headers=headers)).status_code == 404


@pytest.mark.anyio
async def test_roster_before_draft_and_submitted_list(client: AsyncClient):
    await client.post("/draft/2026/picks", json={"picks": _mock_slate()}, headers=_participant("alice"))
    await client.post("/draft/2026/picks", json={"picks": _mock_slate()[:31]}, headers=_participant("bob"))

    board = await client.get("/draft/2026/leaderboard")
    body = board.json()
    assert body["mode"] == "roster"
    assert [(e["participant_id"], e["picks_scored"], e["score"]) for e in body["entries"]] == [
        ("alice", 32, None),
        ("bob", 31, None),
    ]

    submitted = await client.get("/draft/2026/submitted")
    assert [slate["participant_id"] for slate in submitted.json()] == ["alice"]
    assert submitted.json()[0]["display_name"] == "Alice"


@pytest.mark.anyio
async def test_simulation_drives_standings(client: AsyncClient):
    await client.post("/draft/2026/picks", json={"picks": _mock_slate()}, headers=_participant("alice"))
    await client.post("/draft/2026/picks", json={"picks": _mock_slate()[:31]}, headers=_participant("bob"))

    idle = await client.get("/draft/2026/simulation")
    assert idle.json()["phase"] == "idle"

    started = await client.post("/admin/draft/2026/simulation/start", headers=ADMIN)
    assert started.status_code == 200
    assert started.json()["phase"] == "running"
    assert started.json()["total"] == 32

    client.clock.now += int(3.5 * INTERVAL_SECONDS * 1000)
    status = (await client.get("/draft/2026/simulation")).json()
    assert status["revealed_count"] == 3
    assert [pick["player_name"] for pick in status["revealed"]] == [
        "Fernando Mendoza",
        "Arvell Reese",
        "Rueben Bain Jr.",
    ]

    board = (await client.get("/draft/2026/leaderboard")).json()
    assert board["mode"] == "scored"
    assert board["simulated"] is True
    assert [(e["participant_id"], e["score"]) for e in board["entries"]] == [("alice", 9)]

    results = (await client.get("/draft/2026/results", headers=_participant("alice"))).json()
    assert results["simulated"] is True
    assert results["official"] == {"1": "Fernando Mendoza", "2": "Arvell Reese", "3": "Rueben Bain Jr."}
    assert sum(item["points"] for item in results["breakdown"]) == 9

    again = await client.post("/admin/draft/2026/simulation/start", headers=ADMIN)
    assert again.json()["revealed_count"] == 3

    reset = await client.post("/admin/draft/2026/simulation/reset", headers=ADMIN)
    assert reset.json()["phase"] == "idle"
    assert reset.json()["revealed_count"] == 0
    assert (await client.get("/draft/2026/leaderboard")).json()["mode"] == "roster"


@pytest.mark.anyio
async def test_admin_routes_require_secret(client: AsyncClient):
    assert (await client.post("/admin/draft/2026/simulation/start")).status_code == 403
    wrong = await client.post("/admin/draft/2026/start", headers={"X-Admin-Secret": "nope"})
    assert wrong.status_code == 403


@pytest.mark.anyio
async def test_draft_lock_and_official_results(client: AsyncClient):
    headers = _participant("alice")
    await client.post("/draft/2026/picks", json={"picks": _mock_slate()}, headers=headers)

    started = await client.post("/admin/draft/2026/start", headers=ADMIN)
    assert started.status_code == 200

    locked = await client.post("/draft/2026/picks", json={"picks": _mock_slate()}, headers=headers)
    assert locked.status_code == 403
    assert (await client.delete("/draft/2026/picks/1", headers=headers)).status_code == 403

    pending = (await client.get("/draft/2026/leaderboard")).json()
    assert pending["mode"] == "scored"
    assert pending["pending"] is True
    assert pending["entries"][0]["score"] == 0

    upsert = await client.post(
        "/admin/draft/2026/official-results/1",
        json={"player_name": "Fernando Mendoza"},
        headers=ADMIN,
    )
    assert upsert.json() == {"1": "Fernando Mendoza"}
    board = (await client.get("/draft/2026/leaderboard")).json()
    assert board["pending"] is False
    assert board["entries"][0]["score"] == 3

    replaced = await client.put(
        "/admin/draft/2026/official-results",
        json={"results": [{"slot_number": 2, "player_name": "Fernando Mendoza"}]},
        headers=ADMIN,
    )
    assert replaced.json() == {"2": "Fernando Mendoza"}
    assert (await client.get("/draft/2026/leaderboard")).json()["entries"][0]["score"] == 2

    cleared = await client.delete("/admin/draft/2026/official-results/2", headers=ADMIN)
    assert cleared.json() == {}
    missing = await client.delete("/admin/draft/2026/official-results/2", headers=ADMIN)
    assert missing.status_code == 404


@pytest.mark.anyio
async def test_starting_draft_cancels_simulation(client: AsyncClient):
    await client.post("/admin/draft/2026/simulation/start", headers=ADMIN)
    await client.post("/admin/draft/2026/start", headers=ADMIN)
    assert (await client.get("/draft/2026/simulation")).json()["phase"] == "idle"


@pytest.mark.anyio
async def test_sync_upserts_live_results(client: AsyncClient):
    await client.post("/draft/2026/picks", json={"picks": _mock_slate()}, headers=_participant("alice"))
    await client.post("/admin/draft/2026/start", headers=ADMIN)

    synced = await client.post("/admin/draft/2026/sync", headers=ADMIN)
    assert synced.json() == {"year": 2026, "synced": 2, "error": None}
    assert (await client.get("/draft/2026/leaderboard")).json()["entries"][0]["score"] == 6

    client.feed["status"] = 502
    failed = await client.post("/admin/draft/2026/sync", headers=ADMIN)
    assert failed.status_code == 200
    assert failed.json()["synced"] == 0
    assert "502" in failed.json()["error"]


@pytest.mark.anyio
async def test_historical_winners_for_past_year(client: AsyncClient):
    created = await client.post(
        "/admin/draft/2025/historical-winners",
        json={"place": 1, "display_name": "Alice", "score": 52},
        headers=ADMIN,
    )
    assert created.status_code == 200
    winner_id = created.json()["winner_id"]

    board = (await client.get("/draft/2025/leaderboard")).json()
    assert board["mode"] == "historical"
    assert [(e["display_name"], e["rank"], e["score"]) for e in board["entries"]] == [("Alice", 1, 52)]

    deleted = await client.delete(f"/admin/draft/2025/historical-winners/{winner_id}", headers=ADMIN)
    assert deleted.status_code == 200
    fallback = (await client.get("/draft/2025/leaderboard")).json()
    assert fallback["mode"] == "scored"
    assert fallback["entries"] == []


@pytest.mark.anyio
async def test_refresh_players(client: AsyncClient):
    resp = await client.post("/admin/draft/2026/refresh-players", headers=ADMIN)
    assert resp.json() == {"year": 2026, "players": 200}

    missing = await client.post("/admin/draft/2030/refresh-players", headers=ADMIN)
    assert missing.status_code == 404
