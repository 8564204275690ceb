import pytest

from configs import db
from dao import product as product_dao, supplier as supplier_dao
from db.models.supplier import Supplier
from utils.errors import ValidationError


def test_name_is_required(database):
    with pytest.raises(ValidationError, match="Supplier name is required."):
        supplier_dao.create_supplier(name="   ", phone=None, email=None)
    assert Supplier.query.count() == 0


def test_blank_fields_stored_as_null(database):
    s = supplier_dao.create_supplier(name="Medisteril", phone="", email="", customer_reference="")
    assert s.phone is None
    assert s.email is None
    assert s.customer_reference is None


def test_update_trims_name_and_nulls_blanks(supplier):
    s = supplier_dao.update_supplier(supplier.id, name="  Dentaire SA ", phone="", email="x@dentaire.fr")
    assert s.name == "Dentaire SA"
    assert s.phone is None
    assert s.email == "x@dentaire.fr"


def test_update_rejects_blank_name(supplier):
    with pytest.raises(ValidationError):
        supplier_dao.update_supplier(supplier.id, name="")


def test_delete_refused_while_products_reference_supplier(make_product, supplier):
    p = make_product()
    assert supplier_dao.delete_supplier(supplier.id) is False
    assert db.session.get(Supplier, supplier.id) is not None

    other = supplier_dao.create_supplier(name="Implant Direct", phone=None, email=None)
    product_dao.update_product(
        p.id, sku=p.sku, name=p.name, category=p.category, supplier_id=other.id
    )
    assert supplier_dao.delete_supplier(supplier.id) is True
    assert db.session.get(Supplier, supplier.id) is None


def test_delete_unknown_supplier(database):
    assert supplier_dao.delete_supplier(999) is False


def test_search(database):
    supplier_dao.create_supplier(name="Medisteril", phone="0472", email="service@medisteril.fr")
    supplier_dao.create_supplier(name="Dentaire", phone="0140", email="contact@dentaire.fr")
    assert [s.name for s in supplier_dao.list_suppliers("steril")] == ["Medisteril"]
    assert [s.name for s in supplier_dao.list_suppliers("0140")] == ["Dentaire"]
    assert [s.name for s in supplier_dao.list_suppliers()] == ["Dentaire", "Medisteril"]


def test_delete_route_flashes_refusal(client, make_product, supplier):
    make_product()
    resp = client.post(f"/suppliers/delete/{supplier.id}", follow_redirects=True)
    assert b"Cannot delete: the supplier still has products." in resp.data
    db.session.expire_all()
    assert db.session.get(Supplier, supplier.id) is not None


def test_delete_route_removes_unused_supplier(client, supplier):
    resp = client.post(f"/suppliers/delete/{supplier.id}", follow_redirects=True)
    assert b"Supplier deleted" in resp.data
    db.session.expire_all()
    assert db.session.get(Supplier, supplier.id) is None
