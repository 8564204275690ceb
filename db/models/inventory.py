from configs import db
from datetime import datetime
import enum


class MovementType(enum.Enum):
    IN = "IN"
    OUT = "OUT"


class InventoryItem(db.Model):
    __tablename__ = "inventory_item"
    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    product_id = db.Column(db.Integer, db.ForeignKey("product.id"), nullable=False)
    batch_number = db.Column(db.String(80), nullable=False)
    # có thể âm tạm thời khi xuất quá tồn
    quantity = db.Column(db.Integer, default=0, nullable=False)
    expiration_date = db.Column(db.Date)
    created_at = db.Column(db.DateTime, default=datetime.now)
    updated_at = db.Column(db.DateTime, default=datetime.now, onupdate=datetime.now)
    product = db.relationship(
        "Product",
        backref=db.backref(
            "inventory_items", order_by="InventoryItem.id", lazy="selectin"
        ),
    )


class InventoryMovement(db.Model):
    __tablename__ = "inventory_movement"
    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    product_id = db.Column(db.Integer, db.ForeignKey("product.id"), nullable=False)
    type = db.Column(db.Enum(MovementType, name="movementtype"), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)  # luôn > 0, chiều do type
    batch_number = db.Column(db.String(80), nullable=False)
    reference = db.Column(db.String(120))
    notes = db.Column(db.Text)
    created_by = db.Column(
        db.Integer, db.ForeignKey("user_account.id"), nullable=False
    )
    created_at = db.Column(db.DateTime, default=datetime.now)
    product = db.relationship("Product")
    creator = db.relationship("User")
