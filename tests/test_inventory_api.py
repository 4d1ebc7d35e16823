FRAME = {"name": "Wayfarer", "brand": "Ray-Ban", "model": "RB2140", "stock": 3, "price": 3200}


def test_warehouse_manages_frames(api, auth_headers):
    _, headers = auth_headers("warehouse")

    created = api.post("/api/frames/", json=FRAME, headers=headers)

    assert created.status_code == 201
    assert created.json()["stock_label"] == "Stock Bajo"
    assert created.json()["stock_color"] == "yellow"


def test_reception_cannot_manage_frames(api, auth_headers, make_frame):
    _, headers = auth_headers("reception")
    frame = make_frame()

    assert api.post("/api/frames/", json=FRAME, headers=headers).status_code == 403
    assert api.delete(f"/api/frames/{frame.id}", headers=headers).status_code == 403
    assert api.get("/api/frames/", headers=headers).status_code == 200


def test_stock_adjustment_never_goes_below_zero(api, auth_headers, make_frame):
    _, headers = auth_headers("warehouse")
    frame = make_frame(stock=1)

    response = api.post(f"/api/frames/{frame.id}/stock", json={"delta": -3}, headers=headers)

    assert response.status_code == 200
    assert response.json()["stock"] == 0
    assert response.json()["stock_label"] == "Sin Stock"

    response = api.post(f"/api/frames/{frame.id}/stock", json={"delta": 1}, headers=headers)
    assert response.json()["stock"] == 1


def test_frame_stock_filter_and_search(api, auth_headers, make_frame):
    _, headers = auth_headers("admin")
    make_frame(name="Aviador", brand="Ray-Ban", stock=0)
    make_frame(name="Redondo", brand="Vogue", stock=4)
    make_frame(name="Deportivo", brand="Oakley", stock=20)

    out = api.get("/api/frames/", params={"stock": "out"}, headers=headers).json()
    assert [r["name"] for r in out["rows"]] == ["Aviador"]

    low = api.get(
        "/api/frames/", params={"stock": "low", "sort": "name:asc"}, headers=headers
    ).json()
    assert [r["name"] for r in low["rows"]] == ["Aviador", "Redondo"]

    available = api.get("/api/frames/", params={"stock": "available"}, headers=headers).json()
    assert [r["name"] for r in available["rows"]] == ["Deportivo"]

    search = api.get("/api/frames/", params={"search": "oak"}, headers=headers).json()
    assert [r["name"] for r in search["rows"]] == ["Deportivo"]


def test_frame_hard_delete(api, auth_headers, make_frame):
    _, headers = auth_headers("admin")
    frame = make_frame()

    assert api.delete(f"/api/frames/{frame.id}", headers=headers).status_code == 200
    assert api.get(f"/api/frames/{frame.id}", headers=headers).status_code == 404


def test_crystal_labels_and_low_stock_threshold(api, auth_headers, make_crystal):
    _, headers = auth_headers("warehouse")
    crystal = make_crystal(stock=10, coating="blue_light")

    response = api.get(f"/api/crystals/{crystal.id}", headers=headers)

    assert response.json()["stock_label"] == "Stock Bajo"
    assert response.json()["coating_label"] == "Filtro Luz Azul"


def test_crystal_material_filter_and_stock(api, auth_headers, make_crystal):
    _, headers = auth_headers("warehouse")
    make_crystal(material="organico")
    target = make_crystal(material="trivex", stock=2)

    listing = api.get("/api/crystals/", params={"material": "trivex"}, headers=headers).json()
    assert [r["id"] for r in listing["rows"]] == [target.id]

    adjusted = api.post(f"/api/crystals/{target.id}/stock", json={"delta": 5}, headers=headers)
    assert adjusted.json()["stock"] == 7


def test_crystal_create_validates_material(api, auth_headers):
    _, headers = auth_headers("admin")
    payload = {"type": "monofocal", "material": "vidrio", "index": 1.5}
    assert api.post("/api/crystals/", json=payload, headers=headers).status_code == 422
