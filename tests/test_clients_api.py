def test_list_clients_searches_without_accents(api, auth_headers, make_client):
    _, headers = auth_headers("reception")
    make_client("María", "González")
    make_client("Pedro", "Alonso")

    response = api.get("/api/clients/", params={"search": "maria"}, headers=headers)

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 1
    assert body["rows"][0]["first_name"] == "María"
    assert body["empty_message"] is None
    assert body["can_manage"] is True


def test_list_clients_paginates_and_clamps(api, auth_headers, make_client):
    _, headers = auth_headers("admin")
    for i in range(23):
        make_client(f"Cliente{i:02d}")

    response = api.get(
        "/api/clients/", params={"page_size": 10, "page_index": 7}, headers=headers
    )

    body = response.json()
    assert body["page_count"] == 3
    assert body["page_index"] == 2
    assert len(body["rows"]) == 3
    assert body["show_pagination"] is True
    assert body["summary"] == "Mostrando 21 a 23 de 23 resultados"


def test_list_clients_sorted(api, auth_headers, make_client):
    _, headers = auth_headers("admin")
    make_client("Zoe")
    make_client("Ángel")
    make_client("Beto")

    response = api.get("/api/clients/", params={"sort": "first_name:asc"}, headers=headers)

    assert [r["first_name"] for r in response.json()["rows"]] == ["Ángel", "Beto", "Zoe"]
    assert response.json()["sorting"] == [{"column": "first_name", "direction": "asc"}]


def test_list_clients_empty_state_and_active_filter(api, auth_headers, make_client):
    _, headers = auth_headers("admin")
    make_client("Inés", is_active=False)

    response = api.get("/api/clients/", params={"active": True}, headers=headers)

    body = response.json()
    assert body["rows"] == []
    assert body["empty_message"] == "No se encontraron clientes"
    assert body["show_pagination"] is False


def test_invalid_sort_is_rejected(api, auth_headers):
    _, headers = auth_headers("admin")
    response = api.get("/api/clients/", params={"sort": "first_name:up"}, headers=headers)
    assert response.status_code == 422


def test_create_update_toggle_and_soft_delete(api, auth_headers):
    _, headers = auth_headers("reception")
    payload = {
        "first_name": "Lucía",
        "last_name": "Hernández",
        "ci": "01072256789",
        "phone": "+53 5 5678901",
    }

    created = api.post("/api/clients/", json=payload, headers=headers)
    assert created.status_code == 201
    client_id = created.json()["id"]

    updated = api.put(f"/api/clients/{client_id}", json={"phone": "+53 7 1111111"}, headers=headers)
    assert updated.json()["phone"] == "+53 7 1111111"
    assert updated.json()["last_name"] == "Hernández"

    toggled = api.post(f"/api/clients/{client_id}/toggle", headers=headers)
    assert toggled.json()["is_active"] is False

    api.post(f"/api/clients/{client_id}/toggle", headers=headers)
    deleted = api.delete(f"/api/clients/{client_id}", headers=headers)
    assert deleted.status_code == 200

    detail = api.get(f"/api/clients/{client_id}", headers=headers)
    assert detail.status_code == 200
    assert detail.json()["is_active"] is False


def test_warehouse_cannot_manage_clients(api, auth_headers):
    _, headers = auth_headers("warehouse")
    payload = {"first_name": "A", "last_name": "B", "ci": "1", "phone": "2"}

    response = api.post("/api/clients/", json=payload, headers=headers)

    assert response.status_code == 403
    listing = api.get("/api/clients/", headers=headers)
    assert listing.status_code == 200
    assert listing.json()["can_manage"] is False


def test_missing_client_is_404(api, auth_headers):
    _, headers = auth_headers("admin")
    response = api.get("/api/clients/999", headers=headers)
    assert response.status_code == 404
    assert "no encontrado" in response.json()["detail"]
