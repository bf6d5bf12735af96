# Di dalam file: test_api.py


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"message": "Selamat datang di Kalkulator Faraidh"}


def test_health(client):
    response = client.get("/health")
    assert response.json()["status"] == "ok"


def test_daftar_ahli_waris(client):
    response = client.get("/heirs/")
    assert response.status_code == 200
    heirs = response.json()
    assert len(heirs) == 25
    assert heirs[0]["type"] == "HUSBAND"
    son = next(h for h in heirs if h["type"] == "SON")
    assert son["name_id"] == "Anak Laki-laki"
    assert son["gender"] == "male"


def test_hitung_waris(client):
    payload = {
        "estate": {"gross_value": 100_000_000},
        "heirs": [{"type": "WIFE", "count": 1}, {"type": "SON", "count": 1}],
        "deceased": {"gender": "male"},
        "options": {"include_trace": False, "policy": {}},
    }
    response = client.post("/calculate/", json=payload)
    assert response.status_code == 200
    data = response.json()
    assert data["net_estate"] == 100_000_000
    assert data["trace"] is None
    shares = {s["heir_type"]: s for s in data["shares"]}
    assert shares["WIFE"]["fraction"] == {"numerator": 1, "denominator": 8}
    assert shares["WIFE"]["total_value"] == 12_500_000
    assert shares["SON"]["total_value"] == 87_500_000
    assert data["verification"]["is_valid"] is True


def test_error_domain_menjadi_json(client):
    payload = {
        "estate": {"gross_value": 1000},
        "heirs": [{"type": "WIFE", "count": 1}],
        "deceased": {"gender": "female"},
    }
    response = client.post("/calculate/", json=payload)
    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "InvalidHeirTypeForGender"
    assert body["message"]


def test_jenis_ahli_waris_tidak_dikenal(client):
    payload = {
        "estate": {"gross_value": 1000},
        "heirs": [{"type": "STEPSON", "count": 1}],
        "deceased": {"gender": "male"},
    }
    response = client.post("/calculate/", json=payload)
    assert response.status_code == 422
