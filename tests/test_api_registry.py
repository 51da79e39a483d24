"""API anagrafiche: tenant, gruppi, squadre, giocatori."""


def test_health(api):
    r = api.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "healthy"}


def test_db_status_lists_tables(api):
    r = api.get("/db-status")
    assert r.status_code == 200
    tables = r.json()["tables"]
    assert {"clients", "groups", "teams", "players", "matches", "match_events"} <= set(tables)


class TestTenancy:
    def test_missing_header(self, api):
        assert api.get("/api/groups").status_code == 400

    def test_unknown_client(self, api):
        assert api.get("/api/groups", headers={"X-Client-Id": "999"}).status_code == 404

    def test_inactive_client(self, api, tenant):
        client_id = tenant["X-Client-Id"]
        r = api.patch(f"/api/clients/{client_id}", json={"status": "INACTIVE"})
        assert r.status_code == 200
        assert api.get("/api/groups", headers=tenant).status_code == 403

    def test_data_is_scoped_per_client(self, api, tenant, make_group):
        make_group("A", ["Alfa", "Beta"])
        other = api.post("/api/clients", json={"name": "Altro", "slug": "altro"}).json()
        headers = {"X-Client-Id": str(other["id"])}
        assert api.get("/api/groups", headers=headers).json() == []
        assert api.get("/api/teams", headers=headers).json() == []


class TestClients:
    def test_slug_is_lowercased_and_unique(self, api):
        r = api.post("/api/clients", json={"name": "Torneo", "slug": "Torneo-Estivo"})
        assert r.status_code == 201
        assert r.json()["slug"] == "torneo-estivo"
        assert r.json()["status"] == "ACTIVE"
        r = api.post("/api/clients", json={"name": "Altro", "slug": "torneo-estivo"})
        assert r.status_code == 409

    def test_get_and_list(self, api, tenant):
        client_id = int(tenant["X-Client-Id"])
        assert api.get(f"/api/clients/{client_id}").json()["id"] == client_id
        assert [c["id"] for c in api.get("/api/clients").json()] == [client_id]
        assert api.get("/api/clients/999").status_code == 404


class TestGroups:
    def test_name_is_uppercased_and_unique(self, api, tenant):
        r = api.post("/api/groups", json={"name": " a "}, headers=tenant)
        assert r.status_code == 201
        assert r.json()["name"] == "A"
        assert api.post("/api/groups", json={"name": "A"}, headers=tenant).status_code == 409

    def test_list_with_team_count(self, api, tenant, make_group):
        make_group("B", ["Gamma"])
        make_group("A", ["Alfa", "Beta"])
        groups = api.get("/api/groups", headers=tenant).json()
        assert [(g["name"], g["team_count"]) for g in groups] == [("A", 2), ("B", 1)]

    def test_group_teams_in_registration_order(self, api, tenant, make_group):
        group_id, team_ids = make_group("A", ["Zeta", "Alfa", "Mu"])
        teams = api.get(f"/api/groups/{group_id}/teams", headers=tenant).json()
        assert [t["id"] for t in teams] == team_ids

    def test_rename(self, api, tenant, make_group):
        group_id, _ = make_group("A", ["Alfa"])
        make_group("B", [])
        r = api.put(f"/api/groups/{group_id}", json={"name": "c"}, headers=tenant)
        assert r.status_code == 200
        assert r.json() == {"id": group_id, "name": "C", "team_count": 1}
        assert api.put(f"/api/groups/{group_id}", json={"name": "b"}, headers=tenant).status_code == 409

    def test_delete_unassigns_teams(self, api, tenant, make_group):
        group_id, team_ids = make_group("A", ["Alfa", "Beta"])
        r = api.delete(f"/api/groups/{group_id}", headers=tenant)
        assert r.status_code == 200
        assert r.json()["teams_detached"] == 2
        teams = api.get("/api/teams", headers=tenant).json()
        assert {t["id"] for t in teams} == set(team_ids)
        assert all(t["group_id"] is None for t in teams)


class TestTeams:
    def test_name_rules(self, api, tenant):
        assert api.post("/api/teams", json={"name": " X "}, headers=tenant).status_code == 422
        assert api.post("/api/teams", json={"name": "Alfa"}, headers=tenant).status_code == 201
        assert api.post("/api/teams", json={"name": "alfa"}, headers=tenant).status_code == 409

    def test_group_must_belong_to_client(self, api, tenant):
        assert api.post("/api/teams", json={"name": "Alfa", "group_id": 42}, headers=tenant).status_code == 404

    def test_filter_and_update(self, api, tenant, make_group):
        group_a, (alfa,) = make_group("A", ["Alfa"])
        group_b, (beta,) = make_group("B", ["Beta"])
        assert [t["id"] for t in api.get(f"/api/teams?group_id={group_a}", headers=tenant).json()] == [alfa]

        r = api.patch(f"/api/teams/{beta}", json={"name": "Beta FC", "group_id": group_a}, headers=tenant)
        assert r.status_code == 200
        assert r.json()["group_id"] == group_a
        r = api.patch(f"/api/teams/{beta}", json={"clear_group": True}, headers=tenant)
        assert r.json()["group_id"] is None
        assert api.patch(f"/api/teams/{beta}", json={"name": "Alfa"}, headers=tenant).status_code == 409

    def test_delete(self, api, tenant, make_group):
        _, (alfa,) = make_group("A", ["Alfa"])
        assert api.delete(f"/api/teams/{alfa}", headers=tenant).status_code == 200
        assert api.delete(f"/api/teams/{alfa}", headers=tenant).status_code == 404


class TestPlayers:
    def test_shirt_number_unique_within_team(self, api, tenant, make_group):
        _, (alfa, beta) = make_group("A", ["Alfa", "Beta"])
        payload = {"name": "Rossi", "team_id": alfa, "shirt_number": 10}
        assert api.post("/api/players", json=payload, headers=tenant).status_code == 201
        assert api.post("/api/players", json={**payload, "name": "Bianchi"}, headers=tenant).status_code == 409
        assert api.post("/api/players", json={**payload, "team_id": beta}, headers=tenant).status_code == 201

    def test_name_and_team_validation(self, api, tenant):
        assert api.post("/api/players", json={"name": "R"}, headers=tenant).status_code == 422
        assert api.post("/api/players", json={"name": "Rossi", "team_id": 99}, headers=tenant).status_code == 404

    def test_list_filter_and_delete(self, api, tenant, make_group):
        _, (alfa, beta) = make_group("A", ["Alfa", "Beta"])
        rossi = api.post("/api/players", json={"name": "Rossi", "team_id": alfa}, headers=tenant).json()
        api.post("/api/players", json={"name": "Verdi", "team_id": beta}, headers=tenant)
        listed = api.get(f"/api/players?team_id={alfa}", headers=tenant).json()
        assert [p["name"] for p in listed] == ["Rossi"]
        assert api.delete(f"/api/players/{rossi['id']}", headers=tenant).status_code == 200
        assert len(api.get("/api/players", headers=tenant).json()) == 1

    def test_update(self, api, tenant, make_group):
        _, (alfa, beta) = make_group("A", ["Alfa", "Beta"])
        rossi = api.post(
            "/api/players", json={"name": "Rossi", "team_id": alfa, "shirt_number": 10}, headers=tenant,
        ).json()
        api.post("/api/players", json={"name": "Verdi", "team_id": beta, "shirt_number": 7}, headers=tenant)
        url = f"/api/players/{rossi['id']}"

        r = api.patch(url, json={"name": " Rossi Mario ", "shirt_number": 11, "active": False}, headers=tenant)
        assert r.status_code == 200
        assert (r.json()["name"], r.json()["shirt_number"], r.json()["active"]) == ("Rossi Mario", 11, False)
        assert api.patch(url, json={"shirt_number": 11}, headers=tenant).status_code == 200

        assert api.patch(url, json={"team_id": beta, "shirt_number": 7}, headers=tenant).status_code == 409
        r = api.patch(url, json={"team_id": beta}, headers=tenant)
        assert r.status_code == 200
        assert r.json()["team_id"] == beta

        assert api.patch(url, json={"clear_team": True}, headers=tenant).json()["team_id"] is None
        assert api.patch(url, json={"team_id": 999}, headers=tenant).status_code == 404
        assert api.patch(url, json={"name": "R"}, headers=tenant).status_code == 422
        assert api.patch("/api/players/999", json={"name": "Nessuno"}, headers=tenant).status_code == 404
