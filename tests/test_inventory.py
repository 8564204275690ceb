from types import SimpleNamespace

import pytest
from sqlalchemy.exc import OperationalError

from configs import db
from dao import inventory as inv_dao
from db.models.inventory import InventoryItem, InventoryMovement, MovementType
from db.models.product import ProductStatus
from utils.errors import NotAuthenticated, PersistenceFailure, ValidationError


def _set_quantity(product, qty):
    item = inv_dao.ledger_item(product.id)
    item.quantity = qty
    db.session.commit()


def _quantity(product):
    return inv_dao.total_quantity(inv_dao.list_inventory_items(product.id))


def test_in_movement_adds_quantity(make_product, user):
    p = make_product()
    inv_dao.apply_movement(p.id, "IN", 5, "B-1", actor_id=user.id)
    assert _quantity(p) == 5
    assert p.status == ProductStatus.ACTIVE


def test_out_movement_subtracts_quantity(make_product, user):
    p = make_product()
    _set_quantity(p, 10)
    mv = inv_dao.apply_movement(p.id, "OUT", 3, "B-1", actor_id=user.id)
    assert _quantity(p) == 7
    assert mv.type == MovementType.OUT
    assert mv.created_by == user.id
    assert mv.created_at is not None


def test_out_to_zero_marks_out_of_stock(make_product, user):
    p = make_product()
    _set_quantity(p, 1)
    inv_dao.apply_movement(p.id, "OUT", 1, "B-1", actor_id=user.id)
    assert _quantity(p) == 0
    assert p.status == ProductStatus.OUT_OF_STOCK


def test_in_from_zero_reactivates(make_product, user):
    p = make_product()
    p.status = ProductStatus.OUT_OF_STOCK
    db.session.commit()
    inv_dao.apply_movement(p.id, MovementType.IN, 2, "B-1", actor_id=user.id)
    assert _quantity(p) == 2
    assert p.status == ProductStatus.ACTIVE


def test_out_below_zero_is_recorded_without_clamping(make_product, user):
    p = make_product()
    _set_quantity(p, 2)
    inv_dao.apply_movement(p.id, "OUT", 5, "B-1", actor_id=user.id)
    assert _quantity(p) == -3
    assert p.status == ProductStatus.OUT_OF_STOCK


def test_positive_movement_overwrites_inactive(make_product, user):
    p = make_product(status="INACTIVE")
    assert p.status == ProductStatus.INACTIVE
    inv_dao.apply_movement(p.id, "IN", 1, "B-1", actor_id=user.id)
    assert p.status == ProductStatus.ACTIVE


@pytest.mark.parametrize("qty", [0, -1, "abc", 1.5, None, True])
def test_invalid_quantity_writes_nothing(make_product, user, qty):
    p = make_product()
    with pytest.raises(ValidationError):
        inv_dao.apply_movement(p.id, "IN", qty, "B-1", actor_id=user.id)
    assert InventoryMovement.query.count() == 0
    assert _quantity(p) == 0


def test_unknown_type_rejected(make_product, user):
    p = make_product()
    with pytest.raises(ValidationError):
        inv_dao.apply_movement(p.id, "MOVE", 1, "B-1", actor_id=user.id)


def test_missing_actor_is_not_authenticated(make_product):
    p = make_product()
    with pytest.raises(NotAuthenticated):
        inv_dao.apply_movement(p.id, "IN", 1, "B-1", actor_id=None)
    assert InventoryMovement.query.count() == 0


def test_product_without_inventory_record(make_product, user):
    p = make_product()
    InventoryItem.query.filter_by(product_id=p.id).delete()
    db.session.commit()
    with pytest.raises(ValidationError):
        inv_dao.apply_movement(p.id, "IN", 1, "B-1", actor_id=user.id)


def test_failed_commit_rolls_back_every_step(make_product, user, monkeypatch):
    p = make_product()
    _set_quantity(p, 4)

    def boom():
        raise OperationalError("UPDATE", {}, Exception("db down"))

    monkeypatch.setattr(db.session(), "commit", boom)
    with pytest.raises(PersistenceFailure):
        inv_dao.apply_movement(p.id, "OUT", 3, "B-1", actor_id=user.id)
    monkeypatch.undo()

    assert InventoryMovement.query.count() == 0
    assert _quantity(p) == 4
    assert p.status == ProductStatus.ACTIVE


def test_movements_listed_newest_first(make_product, user):
    p = make_product()
    first = inv_dao.apply_movement(p.id, "IN", 1, "B-1", actor_id=user.id)
    second = inv_dao.apply_movement(p.id, "IN", 1, "B-2", actor_id=user.id)
    ids = [m.id for m in inv_dao.list_movements(p.id)]
    assert ids[:2] == [second.id, first.id]


def test_is_low_stock_sums_all_batches():
    product = SimpleNamespace(reorder_point=5)
    low = [SimpleNamespace(quantity=2), SimpleNamespace(quantity=2)]
    ok = [SimpleNamespace(quantity=3), SimpleNamespace(quantity=3)]
    assert inv_dao.is_low_stock(product, low) is True
    assert inv_dao.is_low_stock(product, ok) is False
    # đúng bằng ngưỡng vẫn tính là thấp
    assert inv_dao.is_low_stock(product, [SimpleNamespace(quantity=5)]) is True


def test_deficit():
    product = SimpleNamespace(reorder_point=5)
    assert inv_dao.deficit(product, [SimpleNamespace(quantity=1)]) == 4


def test_derive_status():
    assert inv_dao.derive_status(0) == ProductStatus.OUT_OF_STOCK
    assert inv_dao.derive_status(-2) == ProductStatus.OUT_OF_STOCK
    assert inv_dao.derive_status(1) == ProductStatus.ACTIVE
