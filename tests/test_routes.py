from configs import db
from dao import inventory as inv_dao, patient as patient_dao
from db.models.inventory import InventoryMovement
from db.models.treatment import Treatment


def test_pages_require_login(app, database):
    resp = app.test_client().get("/products")
    assert resp.status_code == 302
    assert "/auth/login" in resp.headers["Location"]


def test_wrong_password_stays_on_login(app, database, user):
    resp = app.test_client().post(
        "/auth/login", data={"email": user.email, "password": "nope"}
    )
    assert resp.status_code == 200
    assert b"Invalid email or password" in resp.data


def test_dashboard_renders(client, make_product):
    make_product(name="Implant titane")
    resp = client.get("/")
    assert resp.status_code == 200
    assert b"Low-stock products: 1" in resp.data


def test_product_add_rejects_duplicate_sku(client, make_product, supplier):
    make_product(sku="IMP-1")
    resp = client.post(
        "/products/add",
        data={
            "sku": "IMP-1",
            "name": "Copy",
            "category": "implants",
            "supplier_id": supplier.id,
        },
    )
    assert resp.status_code == 200
    assert b"This SKU already exists." in resp.data


def test_check_sku_api(client, make_product):
    p = make_product(sku="IMP-1")
    assert client.get("/products/api/check-sku?sku=IMP-1").get_json()["ok"] is False
    assert client.get(f"/products/api/check-sku?sku=IMP-1&exclude_id={p.id}").get_json() == {"ok": True}


def test_record_movement(client, make_product, user):
    p = make_product()
    resp = client.post(
        f"/inventory/movements/add/{p.id}",
        data={"type": "IN", "quantity": "4", "batch_number": "LOT-9", "reference": "BL-12"},
    )
    assert resp.status_code == 302
    db.session.expire_all()
    mv = InventoryMovement.query.one()
    assert mv.created_by == user.id
    assert mv.reference == "BL-12"
    assert inv_dao.total_quantity(inv_dao.list_inventory_items(p.id)) == 4


def test_record_movement_invalid_quantity(client, make_product):
    p = make_product()
    resp = client.post(
        f"/inventory/movements/add/{p.id}",
        data={"type": "OUT", "quantity": "0", "batch_number": "LOT-9"},
    )
    assert resp.status_code == 200
    assert InventoryMovement.query.count() == 0


def test_alert_count_api(client, make_product):
    make_product(reorder_point=2)
    assert client.get("/alerts/api/count").get_json() == {"count": 1}
    resp = client.get("/alerts")
    assert b"Deficit: 2" in resp.data


def test_cost_preview_api(client, make_product, user):
    p = make_product(name="Implant A", sale_price=50)
    inv_dao.apply_movement(p.id, "IN", 1, "B-1", actor_id=user.id)
    resp = client.post(
        "/treatments/api/cost",
        json={"lines": [{"product_id": p.id, "quantity": 1}, {"product_id": p.id, "quantity": 1}]},
    )
    body = resp.get_json()
    assert body["total"] == 100.0
    assert body["lines"][0]["quantity"] == 2
    assert body["stock_errors"] == ["Insufficient stock for Implant A (available: 1)"]


def test_cost_preview_rejects_bad_quantity(client, make_product):
    p = make_product()
    resp = client.post("/treatments/api/cost", json={"lines": [{"product_id": p.id, "quantity": 0}]})
    assert resp.status_code == 400


def test_create_treatment_via_form(client, make_product, user):
    patient = patient_dao.create_patient(first_name="Marie", last_name="Dupont")
    p = make_product(sale_price=30)
    inv_dao.apply_movement(p.id, "IN", 5, "B-1", actor_id=user.id)
    resp = client.post(
        "/treatments/add",
        data={
            "patient_id": patient.id,
            "date": "2026-10-19",
            "type": "FILLING",
            "notes": "",
            "lines[0][product_id]": p.id,
            "lines[0][quantity]": "2",
        },
    )
    assert resp.status_code == 302
    t = Treatment.query.one()
    assert t.created_by == user.id
    assert float(t.cost) == 60.0


def test_treatment_form_shows_stock_errors(client, make_product):
    patient = patient_dao.create_patient(first_name="Marie", last_name="Dupont")
    p = make_product(name="Implant A")
    resp = client.post(
        "/treatments/add",
        data={
            "patient_id": patient.id,
            "date": "2026-10-19",
            "type": "IMPLANT",
            "lines[0][product_id]": p.id,
            "lines[0][quantity]": "3",
        },
    )
    assert resp.status_code == 200
    assert b"Insufficient stock for Implant A (available: 0)" in resp.data
    assert Treatment.query.count() == 0


def test_finance_page_falls_back_to_month(client):
    resp = client.get("/finance?period=decade")
    assert resp.status_code == 200
    assert b"<strong>month</strong>" in resp.data


def test_patient_history_routes(client):
    patient = patient_dao.create_patient(first_name="Marie", last_name="Dupont")
    client.post(
        f"/patients/{patient.id}/history/medical_history/allergies/add",
        data={"value": "latex"},
    )
    db.session.expire_all()
    assert patient_dao.get_patient(patient.id).medical_history["allergies"] == ["latex"]
    client.post(f"/patients/{patient.id}/history/medical_history/allergies/0/delete")
    db.session.expire_all()
    assert patient_dao.get_patient(patient.id).medical_history["allergies"] == []


def test_admin_requires_admin_role(client):
    resp = client.get("/manage/")
    assert resp.status_code == 302


def test_finance_forbidden_for_assistant(app, database):
    from werkzeug.security import generate_password_hash
    from db.models.user import User, UserRole

    db.session.add(
        User(
            email="assistant@clinic.local",
            password_hash=generate_password_hash("secret"),
            role=UserRole.ASSISTANT,
        )
    )
    db.session.commit()
    c = app.test_client()
    c.post("/auth/login", data={"email": "assistant@clinic.local", "password": "secret"})
    assert c.get("/finance").status_code == 403


def test_product_add_rejects_nan_price(client, supplier):
    resp = client.post(
        "/products/add",
        data={
            "sku": "IMP-9",
            "name": "Implant",
            "category": "implants",
            "supplier_id": supplier.id,
            "sale_price": "nan",
        },
    )
    assert resp.status_code == 200
    assert b"Sale price must be a number." in resp.data


def test_treatment_line_without_quantity_is_rejected(client, make_product, user):
    patient = patient_dao.create_patient(first_name="Marie", last_name="Dupont")
    p = make_product()
    inv_dao.apply_movement(p.id, "IN", 5, "B-1", actor_id=user.id)
    resp = client.post(
        "/treatments/add",
        data={
            "patient_id": patient.id,
            "date": "2026-10-19",
            "type": "FILLING",
            "lines[0][product_id]": p.id,
            "lines[0][quantity]": "",
        },
    )
    assert resp.status_code == 200
    assert b"Quantity must be a positive integer." in resp.data
    assert Treatment.query.count() == 0


def test_treatment_delete_failure_is_flashed(client, monkeypatch):
    from dao import treatment as treatment_dao
    from utils.errors import PersistenceFailure

    def boom(treatment_id):
        raise PersistenceFailure("Could not save the treatment.")

    monkeypatch.setattr(treatment_dao, "delete_treatment", boom)
    resp = client.post("/treatments/delete/1", follow_redirects=True)
    assert resp.status_code == 200
    assert b"Could not delete the treatment, please try again." in resp.data
