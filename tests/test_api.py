"""
End-to-end tests through the HTTP surface: tenancy, auth, role gating,
stock entry and the all-or-nothing distribution flow.
"""

from conftest import register_and_login, setup_company


async def _add_product(client, headers, name="Safety Helmet", stock=10, price=25):
    resp = await client.post(
        "/products",
        headers=headers,
        json={"productName": name, "category": "PPE", "totalStock": stock, "dealerPrice": price},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


async def _add_worker(client, headers, name="Ravi Kumar"):
    resp = await client.post(
        "/workers", headers=headers, json={"name": name, "gender": "Male", "mobile": "9000000001"}
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


# ── Company & auth ───────────────────────────────────────────────────────────

async def test_health(client):
    resp = await client.get("/health")

    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


async def test_duplicate_company_name_conflicts(client):
    await setup_company(client, "Acme")

    resp = await client.post("/company/setup", json={"name": "Acme"})

    assert resp.status_code == 409
    assert resp.json()["code"] == "conflict"


async def test_user_id_is_unique_per_company_only(client):
    acme = await setup_company(client, "Acme")
    globex = await setup_company(client, "Globex")
    admin = await register_and_login(client, acme, user_id="admin")

    body = {"companyId": acme, "name": "Other", "userId": "admin", "password": "secret123"}
    resp = await client.post("/auth/register", headers=admin, json=body)
    assert resp.status_code == 409

    await register_and_login(client, globex, user_id="admin")


async def test_register_into_unknown_company_is_not_found(client):
    resp = await client.post(
        "/auth/register",
        json={"companyId": "missing", "name": "X", "userId": "x", "password": "secret123"},
    )

    assert resp.status_code == 404


async def test_first_user_must_be_an_admin(client):
    company_id = await setup_company(client)

    resp = await client.post(
        "/auth/register",
        json={
            "companyId": company_id,
            "name": "Ravi",
            "userId": "ravi",
            "password": "secret123",
            "role": "Worker",
        },
    )

    assert resp.status_code == 422
    assert resp.json()["field"] == "role"


async def test_only_an_admin_of_the_company_registers_more_users(client):
    acme = await setup_company(client, "Acme")
    globex = await setup_company(client, "Globex")
    acme_admin = await register_and_login(client, acme)
    globex_admin = await register_and_login(client, globex)
    manager = await register_and_login(
        client, acme, user_id="m", role="Manager", name="Mo", headers=acme_admin
    )
    body = {
        "companyId": acme,
        "name": "Eve",
        "userId": "eve",
        "password": "secret123",
        "role": "Admin",
    }

    assert (await client.post("/auth/register", json=body)).status_code == 401
    assert (await client.post("/auth/register", headers=manager, json=body)).status_code == 403
    assert (await client.post("/auth/register", headers=globex_admin, json=body)).status_code == 403
    resp = await client.post("/auth/register", headers=acme_admin, json=body)
    assert resp.status_code == 201
    assert resp.json()["role"] == "Admin"


async def test_login_with_wrong_password_is_unauthorized(client):
    company_id = await setup_company(client)
    await register_and_login(client, company_id)

    resp = await client.post(
        "/auth/login",
        json={"companyId": company_id, "userId": "admin", "password": "wrong-pass"},
    )

    assert resp.status_code == 401
    assert resp.headers["www-authenticate"] == "Bearer"


async def test_me_and_company_follow_the_token(client):
    company_id = await setup_company(client, "Acme")
    headers = await register_and_login(client, company_id, name="Asha Admin")

    me = (await client.get("/auth/me", headers=headers)).json()
    company = (await client.get("/company", headers=headers)).json()

    assert me["name"] == "Asha Admin"
    assert me["role"] == "Admin"
    assert "hashedPassword" not in me
    assert company == {"id": company_id, "name": "Acme", "createdAt": company["createdAt"]}


async def test_missing_or_bad_token_is_unauthorized(client):
    assert (await client.get("/products")).status_code == 401
    resp = await client.get("/products", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401


# ── Roles ────────────────────────────────────────────────────────────────────

async def test_worker_role_cannot_enter_stock_or_distribute(client):
    company_id = await setup_company(client)
    admin = await register_and_login(client, company_id)
    worker_headers = await register_and_login(
        client, company_id, user_id="w", role="Worker", headers=admin
    )

    resp = await client.post(
        "/products", headers=worker_headers, json={"productName": "X", "totalStock": 1}
    )
    assert resp.status_code == 403
    resp = await client.post(
        "/distributions",
        headers=worker_headers,
        json={"workerId": "any", "productId": "any", "quantity": 1},
    )
    assert resp.status_code == 403
    assert (await client.get("/products", headers=worker_headers)).status_code == 200


async def test_only_admins_list_users(client):
    company_id = await setup_company(client)
    admin = await register_and_login(client, company_id)
    manager = await register_and_login(
        client, company_id, user_id="m", role="Manager", name="Mo", headers=admin
    )

    assert (await client.get("/users", headers=manager)).status_code == 403
    resp = await client.get("/users", headers=admin)
    assert resp.status_code == 200
    assert {u["userId"] for u in resp.json()} == {"admin", "m"}


# ── Stock entry ──────────────────────────────────────────────────────────────

async def test_stock_entry_merges_by_name(client, admin_headers):
    first = await _add_product(client, admin_headers, "Safety Helmet", 10, 25)
    second = await _add_product(client, admin_headers, "safety helmet", 5, 25)

    assert second["id"] == first["id"]
    assert second["totalStock"] == 15
    assert second["totalValue"] == 375.0

    resp = await client.post(
        "/products/bulk",
        headers=admin_headers,
        json={"items": [{"productName": "Gloves", "totalStock": 3}, {"productName": "Boots", "totalStock": 0}]},
    )
    assert resp.status_code == 201
    listing = (await client.get("/products", headers=admin_headers)).json()
    assert [p["productName"] for p in listing] == ["Boots", "Gloves", "Safety Helmet"]


async def test_negative_stock_entry_is_rejected(client, admin_headers):
    resp = await client.post(
        "/products", headers=admin_headers, json={"productName": "X", "totalStock": -1}
    )

    assert resp.status_code == 422


# ── Distribution ─────────────────────────────────────────────────────────────

async def test_single_line_distribution(client, admin_headers):
    product = await _add_product(client, admin_headers, stock=10)
    worker = await _add_worker(client, admin_headers)

    resp = await client.post(
        "/distributions",
        headers=admin_headers,
        json={"workerId": worker["id"], "productId": product["id"], "quantity": 4, "pricePerUnit": 50},
    )

    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["totalAmount"] == 200.0
    assert body["distributedBy"] == "Asha Admin"
    assert body["workerName"] == "Ravi Kumar"
    stock = (await client.get(f"/products/{product['id']}", headers=admin_headers)).json()
    assert stock["totalStock"] == 6


async def test_price_defaults_to_zero(client, admin_headers):
    product = await _add_product(client, admin_headers, stock=3)
    worker = await _add_worker(client, admin_headers)

    resp = await client.post(
        "/distributions",
        headers=admin_headers,
        json={"workerId": worker["id"], "productId": product["id"], "quantity": 2},
    )

    assert resp.status_code == 201
    assert resp.json()["pricePerUnit"] == 0.0
    assert resp.json()["totalAmount"] == 0.0


async def test_batch_is_all_or_nothing(client, admin_headers):
    p1 = await _add_product(client, admin_headers, "Helmet", stock=5)
    p2 = await _add_product(client, admin_headers, "Gloves", stock=0)
    worker = await _add_worker(client, admin_headers)

    resp = await client.post(
        "/distributions/batch",
        headers=admin_headers,
        json={
            "workerId": worker["id"],
            "items": [
                {"productId": p1["id"], "quantity": 2},
                {"productId": p2["id"], "quantity": 1},
            ],
        },
    )

    assert resp.status_code == 409
    error = resp.json()
    assert error["code"] == "insufficient_stock"
    assert error["product_id"] == p2["id"]
    assert error["requested"] == 1
    assert error["available"] == 0
    assert error["detail"] == "Insufficient stock for Gloves. Requested: 1, Available: 0"

    helmet = (await client.get(f"/products/{p1['id']}", headers=admin_headers)).json()
    assert helmet["totalStock"] == 5
    ledger = (await client.get("/distributions", headers=admin_headers)).json()
    assert ledger["total"] == 0


async def test_batch_success_returns_every_line(client, admin_headers):
    p1 = await _add_product(client, admin_headers, "Helmet", stock=5)
    p2 = await _add_product(client, admin_headers, "Gloves", stock=4)
    worker = await _add_worker(client, admin_headers)

    resp = await client.post(
        "/distributions/batch",
        headers=admin_headers,
        json={
            "workerId": worker["id"],
            "items": [
                {"productId": p1["id"], "quantity": 2, "pricePerUnit": 100},
                {"productId": p2["id"], "quantity": 4, "pricePerUnit": 12.5},
            ],
        },
    )

    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["count"] == 2
    assert body["totalQuantity"] == 6
    assert body["totalAmount"] == 250.0
    assert [i["productName"] for i in body["items"]] == ["Helmet", "Gloves"]


async def test_unknown_worker_or_product_is_not_found(client, admin_headers):
    product = await _add_product(client, admin_headers, stock=5)
    worker = await _add_worker(client, admin_headers)

    resp = await client.post(
        "/distributions",
        headers=admin_headers,
        json={"workerId": "ghost", "productId": product["id"], "quantity": 1},
    )
    assert resp.status_code == 404
    resp = await client.post(
        "/distributions",
        headers=admin_headers,
        json={"workerId": worker["id"], "productId": "ghost", "quantity": 1},
    )
    assert resp.status_code == 404


async def test_non_positive_quantity_is_rejected(client, admin_headers):
    product = await _add_product(client, admin_headers, stock=5)
    worker = await _add_worker(client, admin_headers)

    resp = await client.post(
        "/distributions",
        headers=admin_headers,
        json={"workerId": worker["id"], "productId": product["id"], "quantity": 0},
    )

    assert resp.status_code == 422


async def test_amounts_that_do_not_fit_a_money_column_are_rejected(client, admin_headers):
    product = await _add_product(client, admin_headers, stock=5)
    worker = await _add_worker(client, admin_headers)

    too_precise = await client.post(
        "/distributions",
        headers=admin_headers,
        json={
            "workerId": worker["id"],
            "productId": product["id"],
            "quantity": 1,
            "pricePerUnit": "99999999999.99",
        },
    )
    too_large_total = await client.post(
        "/distributions",
        headers=admin_headers,
        json={
            "workerId": worker["id"],
            "productId": product["id"],
            "quantity": 2,
            "pricePerUnit": "9999999999.99",
        },
    )
    dealer_price = await client.post(
        "/products",
        headers=admin_headers,
        json={"productName": "Crane", "totalStock": 1, "dealerPrice": "99999999999.99"},
    )

    assert too_precise.status_code == 422
    assert too_large_total.status_code == 422
    assert too_large_total.json()["code"] == "validation_error"
    assert dealer_price.status_code == 422
    stock = (await client.get(f"/products/{product['id']}", headers=admin_headers)).json()
    assert stock["totalStock"] == 5


async def test_ledger_has_no_mutating_routes(client, admin_headers):
    product = await _add_product(client, admin_headers, stock=5)
    worker = await _add_worker(client, admin_headers)
    created = (
        await client.post(
            "/distributions",
            headers=admin_headers,
            json={"workerId": worker["id"], "productId": product["id"], "quantity": 1},
        )
    ).json()

    for method in ("PUT", "PATCH", "DELETE"):
        resp = await client.request(method, f"/distributions/{created['id']}", headers=admin_headers)
        assert resp.status_code in (404, 405)
    resp = await client.delete("/distributions", headers=admin_headers)
    assert resp.status_code == 405


# ── Tenancy ──────────────────────────────────────────────────────────────────

async def test_companies_cannot_see_or_use_each_others_stock(client):
    acme = await register_and_login(client, await setup_company(client, "Acme"))
    globex = await register_and_login(client, await setup_company(client, "Globex"))
    product = await _add_product(client, acme, stock=5)
    globex_worker = await _add_worker(client, globex)

    assert (await client.get("/products", headers=globex)).json() == []
    assert (await client.get(f"/products/{product['id']}", headers=globex)).status_code == 404
    resp = await client.post(
        "/distributions",
        headers=globex,
        json={"workerId": globex_worker["id"], "productId": product["id"], "quantity": 1},
    )
    assert resp.status_code == 404
    assert (await client.get(f"/products/{product['id']}", headers=acme)).json()["totalStock"] == 5


# ── Reports & analytics ──────────────────────────────────────────────────────

async def test_worker_role_sees_only_own_distributions(client):
    company_id = await setup_company(client)
    admin = await register_and_login(client, company_id)
    ravi_login = await register_and_login(
        client, company_id, user_id="ravi", role="Worker", name="Ravi Kumar", headers=admin
    )
    product = await _add_product(client, admin, stock=20)
    ravi = await _add_worker(client, admin, "Ravi Kumar")
    meena = await _add_worker(client, admin, "Meena Das")
    for worker, qty in ((ravi, 2), (meena, 3), (ravi, 1)):
        resp = await client.post(
            "/distributions",
            headers=admin,
            json={"workerId": worker["id"], "productId": product["id"], "quantity": qty},
        )
        assert resp.status_code == 201

    own = (await client.get("/distributions", headers=ravi_login)).json()
    everything = (await client.get("/distributions", headers=admin)).json()
    searched = (await client.get("/distributions", headers=admin, params={"worker": "meena"})).json()

    assert own["total"] == 2
    assert {d["workerName"] for d in own["items"]} == {"Ravi Kumar"}
    assert everything["total"] == 3
    assert searched["total"] == 1

    dashboard = (await client.get("/dashboard", headers=ravi_login)).json()
    assert dashboard["totalDistributed"] == 3
    assert dashboard["totalInventory"] == 14


async def test_dashboard_and_analytics(client, admin_headers):
    helmet = await _add_product(client, admin_headers, "Helmet", stock=6)
    await _add_product(client, admin_headers, "Gloves", stock=0)
    await _add_product(client, admin_headers, "Boots", stock=50)
    worker = await _add_worker(client, admin_headers)
    await client.post(
        "/distributions",
        headers=admin_headers,
        json={"workerId": worker["id"], "productId": helmet["id"], "quantity": 2, "pricePerUnit": 40},
    )

    dashboard = (await client.get("/dashboard", headers=admin_headers)).json()
    assert dashboard["totalProducts"] == 3
    assert dashboard["totalInventory"] == 54
    assert dashboard["outOfStock"] == 1
    assert dashboard["lowStock"] == 1
    assert dashboard["totalWorkers"] == 1
    assert dashboard["topProducts"] == [{"name": "Helmet", "value": 2}]
    assert dashboard["workerStats"] == [{"name": "Ravi Kumar", "value": 1}]
    assert dashboard["distributionCount"] == 1
    assert [p["productName"] for p in dashboard["lowStockList"]] == ["Helmet"]

    analytics = (await client.get("/analytics", headers=admin_headers)).json()
    assert analytics["totalValue"] == 80.0
    assert analytics["workerImpact"] == [{"name": "Ravi Kumar", "value": 2}]
    assert len(analytics["trend"]) == 1
