# dao/inventory.py
import logging
from typing import Iterable, List, Optional
from sqlalchemy.exc import SQLAlchemyError
from configs import db
from db.models.inventory import InventoryItem, InventoryMovement, MovementType
from db.models.product import Product, ProductStatus
from utils.errors import NotAuthenticated, PersistenceFailure, ValidationError

logger = logging.getLogger(__name__)

INITIAL_BATCH = "INITIAL"


def _to_movement_type(v) -> MovementType:
    if isinstance(v, MovementType):
        return v
    s = (v or "").strip().upper()
    try:
        return MovementType[s]
    except KeyError:
        raise ValidationError("Movement type must be IN or OUT.")


def _positive_int(v, label: str = "Quantity") -> int:
    """Chỉ nhận số nguyên dương (bool, 1.5, '0' đều bị từ chối)."""
    if isinstance(v, bool):
        raise ValidationError(f"{label} must be a positive integer.")
    try:
        if isinstance(v, float) and not v.is_integer():
            raise ValueError
        n = int(v)
    except (TypeError, ValueError):
        raise ValidationError(f"{label} must be a positive integer.")
    if n <= 0:
        raise ValidationError(f"{label} must be a positive integer.")
    return n


# ---------- pure helpers ----------
def total_quantity(items: Iterable) -> int:
    """Tổng tồn của 1 sản phẩm = cộng quantity mọi InventoryItem."""
    return sum(int(it.quantity or 0) for it in items)


def derive_status(quantity: int) -> ProductStatus:
    # nơi duy nhất quyết định status theo tồn kho
    return ProductStatus.OUT_OF_STOCK if quantity <= 0 else ProductStatus.ACTIVE


def is_low_stock(product, inventory_items: Iterable) -> bool:
    """Cần đặt hàng lại khi tổng tồn <= reorder_point."""
    return total_quantity(inventory_items) <= int(product.reorder_point or 0)


def deficit(product, inventory_items: Iterable) -> int:
    return int(product.reorder_point or 0) - total_quantity(inventory_items)


# ---------- queries ----------
def list_inventory_items(product_id: Optional[int] = None) -> List[InventoryItem]:
    q = InventoryItem.query
    if product_id is not None:
        q = q.filter_by(product_id=int(product_id))
    return q.order_by(InventoryItem.created_at.desc(), InventoryItem.id.desc()).all()


def list_movements(product_id: Optional[int] = None) -> List[InventoryMovement]:
    q = InventoryMovement.query
    if product_id is not None:
        q = q.filter_by(product_id=int(product_id))
    return q.order_by(
        InventoryMovement.created_at.desc(), InventoryMovement.id.desc()
    ).all()


def ledger_item(product_id: int) -> Optional[InventoryItem]:
    """Bản ghi tồn mà movement cộng/trừ vào: bản ghi cũ nhất (lô INITIAL)."""
    return (
        InventoryItem.query.filter_by(product_id=int(product_id))
        .order_by(InventoryItem.id.asc())
        .first()
    )


def ensure_inventory_item(product_id: int) -> InventoryItem:
    item = ledger_item(product_id)
    if not item:
        item = InventoryItem(
            product_id=int(product_id), batch_number=INITIAL_BATCH, quantity=0
        )
        db.session.add(item)
        db.session.flush()
    return item


# ---------- mutations ----------
def apply_movement(
    product_id: int,
    type,
    quantity,
    batch_number: str,
    actor_id: Optional[int],
    reference: Optional[str] = None,
    notes: Optional[str] = None,
) -> InventoryMovement:
    """
    Ghi 1 movement rồi cập nhật tồn + status của sản phẩm.
    Cả 3 bước nằm trong 1 transaction: lỗi ở bước nào cũng rollback hết.
    Không chặn tồn âm (OUT quá tồn vẫn ghi nhận).
    """
    mv_type = _to_movement_type(type)
    qty = _positive_int(quantity)
    batch_number = (batch_number or "").strip()
    if not batch_number:
        raise ValidationError("Batch number is required.")
    if actor_id is None:
        raise NotAuthenticated("User not authenticated")

    product = Product.query.get(int(product_id)) if product_id else None
    if not product:
        raise ValidationError("Product not found.")
    item = ledger_item(product.id)
    if not item:
        raise ValidationError(f"No inventory record for {product.name}.")

    mv = InventoryMovement(
        product_id=product.id,
        type=mv_type,
        quantity=qty,
        batch_number=batch_number,
        reference=(reference or "").strip() or None,
        notes=(notes or "").strip() or None,
        created_by=int(actor_id),
    )
    db.session.add(mv)

    current = int(item.quantity or 0)
    new_quantity = current + qty if mv_type == MovementType.IN else current - qty
    item.quantity = new_quantity
    db.session.flush()

    # status theo tổng tồn (= new_quantity khi chỉ có lô INITIAL)
    product.status = derive_status(total_quantity(list_inventory_items(product.id)))

    _commit()
    logger.info(
        "Movement %s %s x%d on product %s: %d -> %d (%s)",
        mv.id,
        mv_type.value,
        qty,
        product.sku,
        current,
        new_quantity,
        product.status.value,
    )
    return mv


def _commit():
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("Inventory commit failed")
        raise PersistenceFailure("Could not save inventory changes.") from e
