"""
API tests for /health and /api/trades.

Tests:
1-2. Health and trade listing
3-4. Form validation endpoint
5-9. Calculate endpoint (success, cents add up, incomplete, invalid, unknown trade)
"""


# ============================================================
# Discovery
# ============================================================

def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "app": "takeoff-estimator"}


def test_list_trades(client):
    resp = client.get("/api/trades")
    assert resp.status_code == 200
    trades = resp.json()
    assert [t["trade"] for t in trades] == [
        "deck", "framing", "excavation", "concrete",
        "gutters", "retaining_wall", "pavers", "fencing",
        "drywall", "flooring", "tile", "paint",
        "siding", "veneer", "roofing", "foundation",
    ]
    deck = trades[0]
    assert deck["label"] == "Deck"
    cantilever = next(f for f in deck["fields"] if f["name"] == "cantilever_length")
    assert cantilever["enabled_by"] == "include_cantilever"
    assert cantilever["soft_max"] == 24


# ============================================================
# Validate
# ============================================================

def test_validate_reports_missing(client):
    resp = client.post("/api/trades/deck/validate", json={"fields": {"length": 20}})
    assert resp.status_code == 200
    assert resp.json() == {"valid": False, "missing": ["width"], "invalid": None}


def test_validate_unknown_trade(client):
    resp = client.post("/api/trades/plumbing/validate", json={"fields": {}})
    assert resp.status_code == 404


# ============================================================
# Calculate
# ============================================================

def test_calculate_concrete(client):
    resp = client.post("/api/trades/concrete/calculate",
                       json={"fields": {"length": "10", "width": "10", "thickness": "4"}})
    assert resp.status_code == 200
    data = resp.json()
    assert data["trade"] == "concrete"
    total = data["items"][-1]
    assert total["kind"] == "total"
    assert total["cost"] == 349.0
    assert data["estimate_lines"] == [{
        "description": "Bags of Concrete - 50 80lb bags",
        "quantity": 50.0,
        "unit": "80lb bags",
        "unit_price": 6.98,
        "total_price": 349.0,
        "type": "material",
    }]


def test_calculate_priced_items_add_up_to_total(client):
    resp = client.post("/api/trades/excavation/calculate", json={"fields": {
        "length": 10, "width": 10, "depth": 1,
        "removal_cost_per_yard": 1.01, "include_spoil_factor": False, "haul_off_cost": 1.005,
    }})
    assert resp.status_code == 200
    items = resp.json()["items"]
    costs = [item["cost"] for item in items if item["kind"] == "priced"]
    assert costs == [3.74, 1.0]
    assert items[-1]["cost"] == 4.74


def test_calculate_incomplete(client):
    resp = client.post("/api/trades/deck/calculate", json={"fields": {"length": 20}})
    assert resp.status_code == 422
    detail = resp.json()["detail"]
    assert detail["error"] == "incomplete_input"
    assert detail["missing"] == ["width"]


def test_calculate_invalid_dimension(client):
    resp = client.post("/api/trades/deck/calculate", json={"fields": {"length": 20, "width": -1}})
    assert resp.status_code == 422
    assert resp.json()["detail"]["error"] == "invalid_dimension"


def test_calculate_unknown_trade(client):
    resp = client.post("/api/trades/plumbing/calculate", json={"fields": {}})
    assert resp.status_code == 404
    assert "plumbing" in resp.json()["detail"]
