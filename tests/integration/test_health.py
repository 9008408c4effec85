def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"ok": True}


def test_health_payments(client):
    res = client.get("/health/payments")
    assert res.status_code == 200
    data = res.json()
    assert data["provider"] == "mock"
    assert data["currency"] == "eur"
    assert "stripe_configured" in data
    # Lifespan en mode test: limiter désactivé
    assert data["rate_limit"]["enabled"] is False
