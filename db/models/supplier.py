from configs import db
from datetime import datetime


class Supplier(db.Model):
    __tablename__ = "supplier"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    name = db.Column(db.String(255), nullable=False)

    phone = db.Column(db.String(30))
    email = db.Column(db.String(255))
    customer_reference = db.Column(db.String(100))  # mã khách hàng của phòng khám bên NCC

    created_at = db.Column(db.DateTime, default=datetime.now)
    updated_at = db.Column(db.DateTime, default=datetime.now, onupdate=datetime.now)
