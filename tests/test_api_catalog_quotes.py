"""
Catalog and quote API tests.
"""

from cart_configurator import models


def _saved_configuration(client):
    body = client.post("/api/configurations/new", json={"platform_id": "standard-cart-v1"}).json()
    config_id = body["configuration"]["id"]
    client.post(f"/api/configurations/{config_id}/options/light-bar")
    return config_id


def _submit(client, config_id, **overrides):
    data = {
        "configuration_id": config_id,
        "customer_name": "Pat Rivera",
        "customer_email": "pat@example.com",
        "customer_phone": "555-0100",
        "message": "Need it before the member-guest",
    }
    data.update(overrides)
    return client.post("/api/quotes/", json=data)


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "app": "cart-configurator"}


# --- Catalog ---

def test_platforms_and_default_platform(client, seeded):
    platforms = client.get("/api/catalog/platforms").json()
    assert [p["id"] for p in platforms] == ["standard-cart-v1"]

    platform = client.get("/api/catalog/platform").json()
    assert platform["name"] == "Standard Golf Cart"
    assert platform["base_price"] == 8500.0


def test_default_platform_missing_on_empty_catalog(client):
    assert client.get("/api/catalog/platform").status_code == 404


def test_options_carry_reconciled_relations(client, seeded):
    options = client.get("/api/catalog/options", params={"platform_id": "standard-cart-v1"}).json()
    assert len(options) == 21
    lift = next(o for o in options if o["id"] == "suspension-lift-6")
    assert lift["requires"] == ["wheels-offroad"]
    assert lift["excludes"] == ["suspension-lift-3"]
    assert lift["part_price"] == 2400.0


def test_inactive_option_hidden(client, seeded):
    row = seeded.query(models.Option).filter(models.Option.id == "fab-bed-liner").first()
    row.is_active = False
    seeded.commit()
    ids = {o["id"] for o in client.get("/api/catalog/options").json()}
    assert "fab-bed-liner" not in ids
    assert "fab-custom-bumper" in ids


def test_materials_all_and_by_zone(client, seeded):
    assert len(client.get("/api/catalog/materials").json()) == 14

    body = client.get("/api/catalog/materials/body").json()
    assert {m["id"] for m in body} == {
        "paint-white-gloss", "paint-black-matte", "paint-red-metallic", "paint-blue-gloss",
    }
    assert all(m["zone"] == "BODY" for m in body)

    assert client.get("/api/catalog/materials/DASHBOARD").status_code == 404


def test_material_row_outside_zone_enum_skipped(client, seeded):
    seeded.add(models.Material(id="mat-floor", zone="FLOOR", type="VINYL", name="Floor Mat",
                               finish="MATTE", price_multiplier=1.0))
    seeded.commit()

    ids = {m["id"] for m in client.get("/api/catalog/materials").json()}
    assert "mat-floor" not in ids
    assert len(ids) == 14

    response = client.post("/api/configurations/new", json={"platform_id": "standard-cart-v1"})
    assert response.status_code == 200


def test_catalog_issues_clean_then_flagged(client, seeded):
    assert client.get("/api/catalog/issues").json() == {"valid": True, "issues": []}

    seeded.add(models.OptionRelation(option_id="light-bar", related_id="light-bar", type="REQUIRES"))
    seeded.add(models.OptionRelation(option_id="audio-basic", related_id="winch-kit", type="REQUIRES"))
    seeded.commit()

    result = client.get("/api/catalog/issues").json()
    assert result["valid"] is False
    assert 'Option "Roof Light Bar" requires itself' in result["issues"]
    assert 'Option "Basic Audio" references unknown option ID: winch-kit' in result["issues"]


# --- Quotes ---

def test_submit_quote(client, seeded):
    config_id = _saved_configuration(client)
    response = _submit(client, config_id)
    assert response.status_code == 200

    quote = response.json()
    assert quote["status"] == "PENDING"
    assert quote["configuration_id"] == config_id
    assert quote["configuration"]["selected_options"] == ["light-bar"]
    assert quote["grand_total"] == 8500.0 + 600.0 + 375.0


def test_submit_quote_for_unsaved_configuration(client, seeded):
    assert _submit(client, "config-never-saved").status_code == 404


def test_submit_quote_requires_customer_fields(client, seeded):
    config_id = _saved_configuration(client)
    response = client.post("/api/quotes/", json={"configuration_id": config_id})
    assert response.status_code == 422


def test_list_quotes_newest_first(client, seeded):
    config_id = _saved_configuration(client)
    _submit(client, config_id, customer_name="First", submitted_at="2026-03-01T10:00:00Z")
    _submit(client, config_id, customer_name="Second", submitted_at="2026-03-02T10:00:00Z")

    quotes = client.get("/api/quotes/").json()
    assert [q["customer_name"] for q in quotes] == ["Second", "First"]

    page = client.get("/api/quotes/", params={"skip": 1, "limit": 1}).json()
    assert [q["customer_name"] for q in page] == ["First"]


def test_get_quote(client, seeded):
    config_id = _saved_configuration(client)
    quote_id = _submit(client, config_id).json()["id"]

    response = client.get(f"/api/quotes/{quote_id}")
    assert response.status_code == 200
    assert response.json()["customer_email"] == "pat@example.com"

    assert client.get("/api/quotes/nope").status_code == 404


def test_update_quote_status(client, seeded):
    config_id = _saved_configuration(client)
    quote_id = _submit(client, config_id).json()["id"]

    response = client.patch(f"/api/quotes/{quote_id}/status", json={"status": "REVIEWED"})
    assert response.status_code == 200
    assert response.json()["status"] == "REVIEWED"

    bad = client.patch(f"/api/quotes/{quote_id}/status", json={"status": "SHIPPED"})
    assert bad.status_code == 422
    assert client.get(f"/api/quotes/{quote_id}").json()["status"] == "REVIEWED"
