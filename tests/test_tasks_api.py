from datetime import date


def test_list_tasks_with_progress_and_join(api, auth_headers, make_client, make_contract, make_task):
    _, headers = auth_headers("warehouse")
    contract = make_contract(make_client("María", "López"), status="Entregado a Producción")
    make_task(contract, measure=True, mark=True)

    body = api.get("/api/tasks/", headers=headers).json()

    row = body["rows"][0]
    assert row["completed_steps"] == 2
    assert row["total_steps"] == 6
    assert row["percentage"] == 33.33
    assert row["progress_color"] == "orange"
    assert row["progress_status"] == "in_progress"
    assert row["contract"]["client"]["first_name"] == "María"
    assert [s["key"] for s in row["steps"]] == [
        "measure", "mark", "cut", "bevel", "mount", "quality_check",
    ]


def test_tasks_search_by_client_without_accents(api, auth_headers, make_client, make_contract, make_task):
    _, headers = auth_headers("reception")
    make_task(make_contract(make_client("María")))
    make_task(make_contract(make_client("Pedro")))

    body = api.get("/api/tasks/", params={"search": "MARIA"}, headers=headers).json()

    assert body["total"] == 1


def test_progress_filter(api, auth_headers, make_client, make_contract, make_task):
    _, headers = auth_headers("admin")
    contract = make_contract(make_client())
    make_task(contract)
    make_task(contract, measure=True)
    make_task(
        contract, measure=True, mark=True, cut=True, bevel=True, mount=True, quality_check=True
    )

    def total(progress):
        params = {"progress": progress}
        return api.get("/api/tasks/", params=params, headers=headers).json()["total"]

    assert total("all") == 3
    assert total("pending") == 2
    assert total("in_progress") == 1
    assert total("completed") == 1


def test_tasks_ordered_by_assigned_date_desc(api, auth_headers, make_client, make_contract, make_task):
    _, headers = auth_headers("admin")
    contract = make_contract(make_client())
    old = make_task(contract, assigned_date=date(2026, 1, 1))
    new = make_task(contract, assigned_date=date(2026, 3, 1))

    rows = api.get("/api/tasks/", headers=headers).json()["rows"]

    assert [r["id"] for r in rows] == [new.id, old.id]


def test_toggle_step_in_any_order(api, auth_headers, make_client, make_contract, make_task):
    _, headers = auth_headers("warehouse")
    task = make_task(make_contract(make_client()))

    response = api.post(f"/api/tasks/{task.id}/steps/quality_check", headers=headers)
    assert response.status_code == 200
    assert response.json()["quality_check"] is True
    assert response.json()["measure"] is False

    response = api.post(f"/api/tasks/{task.id}/steps/quality_check", headers=headers)
    assert response.json()["quality_check"] is False


def test_unknown_step_is_rejected(api, auth_headers, make_client, make_contract, make_task):
    _, headers = auth_headers("admin")
    task = make_task(make_contract(make_client()))
    response = api.post(f"/api/tasks/{task.id}/steps/polish", headers=headers)
    assert response.status_code == 422


def test_create_task_from_draft(api, auth_headers, make_client, make_contract):
    _, headers = auth_headers("reception")
    contract = make_contract(make_client(), status="Revisión por Calidad")

    response = api.post(
        "/api/tasks/",
        json={"contract_id": str(contract.id), "measure": True, "notes": "  "},
        headers=headers,
    )

    assert response.status_code == 201
    body = response.json()
    assert body["contract_id"] == contract.id
    assert body["notes"] is None
    assert body["assigned_date"] == date.today().isoformat()


def test_create_task_requires_contract(api, auth_headers):
    _, headers = auth_headers("reception")
    assert api.post("/api/tasks/", json={"contract_id": ""}, headers=headers).status_code == 422
    assert api.post("/api/tasks/", json={"contract_id": "999"}, headers=headers).status_code == 404


def test_contract_options_only_in_production(api, auth_headers, make_client, make_contract):
    _, headers = auth_headers("warehouse")
    client = make_client()
    make_contract(client, status="Encargado")
    wanted = {
        make_contract(client, status="Entregado a Producción").id,
        make_contract(client, status="Revisión por Calidad").id,
        make_contract(client, status="Entregado a Producción Retrabajo").id,
    }

    options = api.get("/api/tasks/contract-options", headers=headers).json()

    assert {o["id"] for o in options} == wanted


def test_delete_task(api, auth_headers, make_client, make_contract, make_task):
    _, headers = auth_headers("admin")
    task = make_task(make_contract(make_client()))
    assert api.delete(f"/api/tasks/{task.id}", headers=headers).status_code == 200
    assert api.get(f"/api/tasks/{task.id}", headers=headers).status_code == 404
