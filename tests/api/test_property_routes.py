from dealbook.data.static_deals import STATIC_DEALS

STATIC_IDS = {d["id"] for d in STATIC_DEALS}


def _create(client, napa_request, **overrides):
    body = {
        "title": "Napa duplex",
        "address": "1 Main St",
        "city": "Napa",
        "state": "CA",
        "zipCode": "94559",
        "projectionInputs": napa_request,
        **overrides,
    }
    resp = client.post("/api/v1/properties", json=body)
    assert resp.status_code == 201
    return resp.json()


class TestListProperties:
    def test_static_deals_served(self, client):
        resp = client.get("/api/v1/properties")
        assert resp.status_code == 200
        assert {p["id"] for p in resp.json()} == STATIC_IDS

    def test_static_deals_have_computed_tables(self, client):
        for prop in client.get("/api/v1/properties").json():
            table = prop["thirtyYearProjections"]
            assert len(table["projections"]) == 30

    def test_drafts_hidden_by_default(self, client, napa_request):
        draft = _create(client, napa_request, isDraft=True)
        published = {p["id"] for p in client.get("/api/v1/properties").json()}
        everything = {p["id"] for p in client.get("/api/v1/properties?include_drafts=true").json()}
        assert draft["id"] not in published
        assert draft["id"] in everything

    def test_falls_back_to_static_deals(self, client_without_tables):
        resp = client_without_tables.get("/api/v1/properties")
        assert resp.status_code == 200
        assert {p["id"] for p in resp.json()} == STATIC_IDS


class TestGetProperty:
    def test_static_deal(self, client):
        resp = client.get("/api/v1/properties/tampa-lake-ave-mhp")
        assert resp.status_code == 200
        rows = resp.json()["thirtyYearProjections"]["projections"]
        # Seller note paid off after year 4
        assert rows[3]["loanBalance"] == 1000000
        assert rows[4]["loanBalance"] == 0

    def test_missing_is_404(self, client):
        assert client.get("/api/v1/properties/nope").status_code == 404

    def test_static_deal_without_tables(self, client_without_tables):
        resp = client_without_tables.get("/api/v1/properties/kc-garner-ave-brrrr")
        assert resp.status_code == 200


class TestCreateProperty:
    def test_attaches_projections(self, client, napa_request):
        prop = _create(client, napa_request)
        assert prop["id"].startswith("prop_")
        assert prop["price"] == 825000
        assert prop["monthlyRent"] == 5600
        assert len(prop["thirtyYearProjections"]["projections"]) == 30
        assert prop["projectionInputs"]["annualInterestRate"] == "0.0675"

    def test_round_trips_through_get(self, client, napa_request):
        prop = _create(client, napa_request)
        fetched = client.get(f"/api/v1/properties/{prop['id']}").json()
        assert fetched["thirtyYearProjections"] == prop["thirtyYearProjections"]

    def test_invalid_inputs_rejected(self, client, napa_request):
        resp = client.post("/api/v1/properties", json={
            "title": "Bad deal",
            "projectionInputs": {**napa_request, "vacancyRate": -5},
        })
        assert resp.status_code == 400
        assert resp.json()["detail"]["field"] == "vacancy_rate"


class TestUpdateProperty:
    def test_recomputes_projection(self, client, napa_request):
        prop = _create(client, napa_request)
        resp = client.patch(
            f"/api/v1/properties/{prop['id']}",
            json={"title": "Napa triplex", "projectionInputs": {**napa_request, "horizonYears": 10}},
        )
        assert resp.status_code == 200
        updated = resp.json()
        assert updated["title"] == "Napa triplex"
        assert len(updated["thirtyYearProjections"]["projections"]) == 10

    def test_missing_is_404(self, client):
        assert client.patch("/api/v1/properties/nope", json={"title": "x"}).status_code == 404


class TestDeleteProperty:
    def test_soft_delete_hides_property(self, client, napa_request):
        prop = _create(client, napa_request)
        assert client.delete(f"/api/v1/properties/{prop['id']}").status_code == 204
        assert client.get(f"/api/v1/properties/{prop['id']}").status_code == 404
        assert client.delete(f"/api/v1/properties/{prop['id']}").status_code == 404


class TestRecomputeProjections:
    def test_stored_property(self, client, napa_request):
        prop = _create(client, napa_request)
        resp = client.post(f"/api/v1/properties/{prop['id']}/projections")
        assert resp.status_code == 200
        assert resp.json()["thirtyYearProjections"] == prop["thirtyYearProjections"]

    def test_static_deal_computed_not_stored(self, client):
        resp = client.post("/api/v1/properties/napa-caymus-house-hack/projections")
        assert resp.status_code == 200
        assert len(resp.json()["thirtyYearProjections"]["projections"]) == 30

    def test_property_without_inputs(self, client):
        prop = client.post("/api/v1/properties", json={"title": "Land"}).json()
        resp = client.post(f"/api/v1/properties/{prop['id']}/projections")
        assert resp.status_code == 400

    def test_all_cash_inputs_survive_recompute(self, client, napa_request):
        all_cash = {k: v for k, v in napa_request.items() if k != "downPaymentAmount"}
        prop = _create(client, napa_request, projectionInputs={**all_cash, "downPaymentPercent": 100})
        assert prop["thirtyYearProjections"]["loanAmount"] == 0
        assert prop["projectionInputs"]["ratesAsFractions"] is True

        resp = client.post(f"/api/v1/properties/{prop['id']}/projections")
        assert resp.status_code == 200
        recomputed = resp.json()
        assert recomputed["thirtyYearProjections"] == prop["thirtyYearProjections"]
        assert recomputed["thirtyYearProjections"]["downPayment"] == 825000
