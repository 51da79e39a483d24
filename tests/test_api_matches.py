"""API partite: creazione manuale, finalizzazione, eventi, classifica, dashboard."""

import pytest

KICKOFF = "2026-04-01T18:00:00"


@pytest.fixture
def league(api, tenant, make_group):
    """Gruppo A con tre squadre e un giocatore per squadra."""
    group_id, team_ids = make_group("A", ["Alfa", "Beta", "Gamma"])
    players = []
    for number, team_id in enumerate(team_ids, start=9):
        r = api.post(
            "/api/players",
            json={"name": f"Bomber {number}", "team_id": team_id, "shirt_number": number},
            headers=tenant,
        )
        players.append(r.json()["id"])
    return {"group_id": group_id, "teams": team_ids, "players": players}


def _create_match(api, headers, group_id, home, away, round_number=1):
    return api.post(
        "/api/matches",
        json={
            "home_team_id": home,
            "away_team_id": away,
            "group_id": group_id,
            "round": round_number,
            "kickoff": KICKOFF,
        },
        headers=headers,
    )


def _event(api, headers, match_id, player_id, event_type, minute=10):
    return api.post(
        f"/api/matches/{match_id}/events",
        json={"type": event_type, "player_id": player_id, "minute": minute},
        headers=headers,
    )


class TestCreateMatch:
    def test_create(self, api, tenant, league):
        alfa, beta, _ = league["teams"]
        r = _create_match(api, tenant, league["group_id"], alfa, beta)
        assert r.status_code == 201
        body = r.json()
        assert body["home_team"]["name"] == "Alfa"
        assert body["group_name"] == "A"
        assert body["status"] == "scheduled"

    def test_same_team_twice(self, api, tenant, league):
        alfa = league["teams"][0]
        assert _create_match(api, tenant, league["group_id"], alfa, alfa).status_code == 422

    def test_team_outside_group(self, api, tenant, league, make_group):
        _, (other,) = make_group("B", ["Omega"])
        r = _create_match(api, tenant, league["group_id"], league["teams"][0], other)
        assert r.status_code == 400

    def test_same_pair_same_round_conflicts(self, api, tenant, league):
        alfa, beta, _ = league["teams"]
        assert _create_match(api, tenant, league["group_id"], alfa, beta, 1).status_code == 201
        assert _create_match(api, tenant, league["group_id"], beta, alfa, 1).status_code == 409
        assert _create_match(api, tenant, league["group_id"], beta, alfa, 2).status_code == 201

    def test_round_must_be_positive(self, api, tenant, league):
        alfa, beta, _ = league["teams"]
        assert _create_match(api, tenant, league["group_id"], alfa, beta, 0).status_code == 422

    def test_unknown_match(self, api, tenant):
        assert api.get("/api/matches/999", headers=tenant).status_code == 404


class TestUpdateAndDeleteMatch:
    def test_reschedule(self, api, tenant, league):
        alfa, beta, _ = league["teams"]
        match_id = _create_match(api, tenant, league["group_id"], alfa, beta).json()["id"]
        r = api.patch(
            f"/api/matches/{match_id}",
            json={"round": 4, "kickoff": "2026-05-10T20:30:00"},
            headers=tenant,
        )
        assert r.status_code == 200
        assert r.json()["round"] == 4
        assert r.json()["kickoff"].startswith("2026-05-10T20:30")
        assert r.json()["home_team"]["id"] == alfa

    def test_unchanged_pair_does_not_conflict_with_itself(self, api, tenant, league):
        alfa, beta, _ = league["teams"]
        match_id = _create_match(api, tenant, league["group_id"], alfa, beta).json()["id"]
        r = api.patch(f"/api/matches/{match_id}", json={"kickoff": KICKOFF}, headers=tenant)
        assert r.status_code == 200

    def test_swap_teams(self, api, tenant, league):
        alfa, beta, gamma = league["teams"]
        match_id = _create_match(api, tenant, league["group_id"], alfa, beta).json()["id"]
        r = api.patch(f"/api/matches/{match_id}", json={"away_team_id": gamma}, headers=tenant)
        assert r.status_code == 200
        assert r.json()["away_team"]["name"] == "Gamma"

    def test_same_pair_same_round_conflicts(self, api, tenant, league):
        alfa, beta, _ = league["teams"]
        gid = league["group_id"]
        _create_match(api, tenant, gid, alfa, beta, 1)
        second = _create_match(api, tenant, gid, beta, alfa, 2).json()["id"]
        assert api.patch(f"/api/matches/{second}", json={"round": 1}, headers=tenant).status_code == 409

    def test_invalid_teams(self, api, tenant, league, make_group):
        alfa, beta, _ = league["teams"]
        _, (omega,) = make_group("B", ["Omega"])
        match_id = _create_match(api, tenant, league["group_id"], alfa, beta).json()["id"]
        url = f"/api/matches/{match_id}"
        assert api.patch(url, json={"away_team_id": alfa}, headers=tenant).status_code == 400
        assert api.patch(url, json={"away_team_id": omega}, headers=tenant).status_code == 400
        assert api.patch(url, json={"away_team_id": 999}, headers=tenant).status_code == 404
        assert api.patch(url, json={"round": 0}, headers=tenant).status_code == 422

    def test_teams_locked_once_events_exist(self, api, tenant, league):
        alfa, beta, gamma = league["teams"]
        match_id = _create_match(api, tenant, league["group_id"], alfa, beta).json()["id"]
        _event(api, tenant, match_id, league["players"][0], "goal")
        r = api.patch(f"/api/matches/{match_id}", json={"away_team_id": gamma}, headers=tenant)
        assert r.status_code == 409

    def test_delete_removes_events(self, api, tenant, league):
        alfa, beta, _ = league["teams"]
        match_id = _create_match(api, tenant, league["group_id"], alfa, beta).json()["id"]
        _event(api, tenant, match_id, league["players"][0], "goal")
        _event(api, tenant, match_id, league["players"][1], "yellow_card")

        r = api.delete(f"/api/matches/{match_id}", headers=tenant)
        assert r.status_code == 200
        assert r.json() == {"deleted": match_id, "events_removed": 2}
        assert api.get(f"/api/matches/{match_id}", headers=tenant).status_code == 404
        assert api.get("/dashboard/stats", headers=tenant).json()["total_events"] == 0
        assert api.delete(f"/api/matches/{match_id}", headers=tenant).status_code == 404


class TestFinalize:
    def test_home_win(self, api, tenant, league):
        alfa, beta, _ = league["teams"]
        match_id = _create_match(api, tenant, league["group_id"], alfa, beta).json()["id"]
        r = api.put(f"/api/matches/{match_id}/finalize", json={"home_goals": 2, "away_goals": 1}, headers=tenant)
        assert r.status_code == 200
        body = r.json()
        assert (body["winner"], body["home_points"], body["away_points"]) == ("Alfa", 3, 0)
        assert api.get(f"/api/matches/{match_id}", headers=tenant).json()["status"] == "finished"

    def test_draw(self, api, tenant, league):
        alfa, beta, _ = league["teams"]
        match_id = _create_match(api, tenant, league["group_id"], alfa, beta).json()["id"]
        body = api.put(
            f"/api/matches/{match_id}/finalize", json={"home_goals": 0, "away_goals": 0}, headers=tenant,
        ).json()
        assert (body["winner"], body["home_points"], body["away_points"]) == ("draw", 1, 1)

    def test_cannot_finalize_twice(self, api, tenant, league):
        alfa, beta, _ = league["teams"]
        match_id = _create_match(api, tenant, league["group_id"], alfa, beta).json()["id"]
        url = f"/api/matches/{match_id}/finalize"
        assert api.put(url, json={"home_goals": 1, "away_goals": 0}, headers=tenant).status_code == 200
        assert api.put(url, json={"home_goals": 2, "away_goals": 0}, headers=tenant).status_code == 400

    def test_negative_score_rejected(self, api, tenant, league):
        alfa, beta, _ = league["teams"]
        match_id = _create_match(api, tenant, league["group_id"], alfa, beta).json()["id"]
        r = api.put(f"/api/matches/{match_id}/finalize", json={"home_goals": -1, "away_goals": 0}, headers=tenant)
        assert r.status_code == 422


class TestEvents:
    def test_goals_update_score(self, api, tenant, league):
        alfa, beta, _ = league["teams"]
        p_alfa, p_beta, _ = league["players"]
        match_id = _create_match(api, tenant, league["group_id"], alfa, beta).json()["id"]

        first = _event(api, tenant, match_id, p_alfa, "goal", 12)
        assert first.status_code == 201
        assert first.json()["team"]["id"] == alfa
        _event(api, tenant, match_id, p_alfa, "goal", 30)
        _event(api, tenant, match_id, p_beta, "goal", 75)
        _event(api, tenant, match_id, p_beta, "yellow_card", 80)

        detail = api.get(f"/api/matches/{match_id}", headers=tenant).json()
        assert (detail["home_goals"], detail["away_goals"]) == (2, 1)
        assert [e["minute"] for e in detail["events"]] == [80, 75, 30, 12]

        r = api.delete(f"/api/matches/{match_id}/events/{first.json()['id']}", headers=tenant)
        assert r.status_code == 200
        detail = api.get(f"/api/matches/{match_id}", headers=tenant).json()
        assert (detail["home_goals"], detail["away_goals"]) == (1, 1)

    def test_player_must_play_in_match(self, api, tenant, league):
        alfa, beta, _ = league["teams"]
        p_gamma = league["players"][2]
        match_id = _create_match(api, tenant, league["group_id"], alfa, beta).json()["id"]
        assert _event(api, tenant, match_id, p_gamma, "goal").status_code == 400

    def test_one_red_card_per_player(self, api, tenant, league):
        alfa, beta, _ = league["teams"]
        p_alfa = league["players"][0]
        match_id = _create_match(api, tenant, league["group_id"], alfa, beta).json()["id"]
        assert _event(api, tenant, match_id, p_alfa, "red_card", 20).status_code == 201
        assert _event(api, tenant, match_id, p_alfa, "red_card", 50).status_code == 400

    def test_minute_and_type_validation(self, api, tenant, league):
        alfa, beta, _ = league["teams"]
        p_alfa = league["players"][0]
        match_id = _create_match(api, tenant, league["group_id"], alfa, beta).json()["id"]
        assert _event(api, tenant, match_id, p_alfa, "goal", 121).status_code == 422
        assert _event(api, tenant, match_id, p_alfa, "own_goal").status_code == 422

    def test_list_and_delete_unknown(self, api, tenant, league):
        alfa, beta, _ = league["teams"]
        p_alfa = league["players"][0]
        match_id = _create_match(api, tenant, league["group_id"], alfa, beta).json()["id"]
        _event(api, tenant, match_id, p_alfa, "assist", 5)
        events = api.get(f"/api/matches/{match_id}/events", headers=tenant).json()
        assert [e["type"] for e in events] == ["assist"]
        assert api.delete(f"/api/matches/{match_id}/events/999", headers=tenant).status_code == 404

    def test_player_with_events_cannot_be_deleted(self, api, tenant, league):
        alfa, beta, _ = league["teams"]
        p_alfa = league["players"][0]
        match_id = _create_match(api, tenant, league["group_id"], alfa, beta).json()["id"]
        _event(api, tenant, match_id, p_alfa, "goal")
        assert api.delete(f"/api/players/{p_alfa}", headers=tenant).status_code == 409


class TestStandingsAndStats:
    def _play(self, api, tenant, league):
        alfa, beta, gamma = league["teams"]
        gid = league["group_id"]
        m1 = _create_match(api, tenant, gid, alfa, beta, 1).json()["id"]
        m2 = _create_match(api, tenant, gid, gamma, alfa, 2).json()["id"]
        _create_match(api, tenant, gid, beta, gamma, 3)
        api.put(f"/api/matches/{m1}/finalize", json={"home_goals": 2, "away_goals": 0}, headers=tenant)
        api.put(f"/api/matches/{m2}/finalize", json={"home_goals": 1, "away_goals": 1}, headers=tenant)

    def test_standings(self, api, tenant, league):
        self._play(api, tenant, league)
        body = api.get("/api/standings", headers=tenant).json()
        (group,) = body["groups"]
        assert group["group_name"] == "A"
        assert [row["team_name"] for row in group["teams"]] == ["Alfa", "Gamma", "Beta"]
        alfa = group["teams"][0]
        assert (alfa["played"], alfa["wins"], alfa["draws"], alfa["losses"]) == (2, 1, 1, 0)
        assert (alfa["goals_for"], alfa["goals_against"], alfa["points"]) == (3, 1, 4)
        assert body["leader"]["team_name"] == "Alfa"

    def test_standings_filtered_by_group(self, api, tenant, league, make_group):
        make_group("B", ["Omega"])
        body = api.get(f"/api/standings?group_id={league['group_id']}", headers=tenant).json()
        assert [g["group_name"] for g in body["groups"]] == ["A"]

    def test_dashboard(self, api, tenant, league):
        self._play(api, tenant, league)
        stats = api.get("/dashboard/stats", headers=tenant).json()
        assert stats["total_matches"] == 3
        assert stats["finished_matches"] == 2
        assert stats["scheduled_matches"] == 1
        assert stats["teams_count"] == 3
        assert stats["active_players"] == 3
        assert stats["total_goals"] == 4
        assert stats["progress_percentage"] == 67

    def test_player_stats(self, api, tenant, league):
        alfa, beta, _ = league["teams"]
        p_alfa, p_beta, _ = league["players"]
        match_id = _create_match(api, tenant, league["group_id"], alfa, beta).json()["id"]
        _event(api, tenant, match_id, p_alfa, "goal", 10)
        _event(api, tenant, match_id, p_alfa, "goal", 20)
        _event(api, tenant, match_id, p_beta, "assist", 30)
        _event(api, tenant, match_id, p_beta, "yellow_card", 40)

        rows = api.get("/api/players/stats", headers=tenant).json()
        assert [r["player_id"] for r in rows] == [p_alfa, p_beta]
        assert (rows[0]["goals"], rows[0]["team_name"]) == (2, "Alfa")
        assert (rows[1]["assists"], rows[1]["yellow_cards"]) == (1, 1)

        stats = api.get("/dashboard/stats", headers=tenant).json()
        assert stats["events"] == {"goals": 2, "yellow_cards": 1, "red_cards": 0, "assists": 1}
        assert stats["total_events"] == 4
