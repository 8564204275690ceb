from configs import db
from datetime import datetime
import enum


class TreatmentType(enum.Enum):
    IMPLANT = "IMPLANT"
    CLEANING = "CLEANING"
    EXTRACTION = "EXTRACTION"
    FILLING = "FILLING"
    CROWN = "CROWN"
    OTHER = "OTHER"


class Treatment(db.Model):
    __tablename__ = "treatment"
    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    patient_id = db.Column(db.Integer, db.ForeignKey("patient.id"), nullable=False)
    date = db.Column(db.DateTime, nullable=False, default=datetime.now)
    type = db.Column(
        db.Enum(TreatmentType, name="treatmenttype"),
        default=TreatmentType.IMPLANT,
        nullable=False,
    )
    notes = db.Column(db.Text)
    cost = db.Column(db.Numeric(12, 2), default=0, nullable=False)  # tính lại từ lines
    created_by = db.Column(
        db.Integer, db.ForeignKey("user_account.id"), nullable=False
    )
    created_at = db.Column(db.DateTime, default=datetime.now)
    updated_at = db.Column(db.DateTime, default=datetime.now, onupdate=datetime.now)
    patient = db.relationship("Patient", backref="treatments")
    creator = db.relationship("User")


class TreatmentProduct(db.Model):
    __tablename__ = "treatment_product"
    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    treatment_id = db.Column(
        db.Integer,
        db.ForeignKey("treatment.id", ondelete="CASCADE"),
        nullable=False,
    )
    product_id = db.Column(db.Integer, db.ForeignKey("product.id"), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    treatment = db.relationship(
        "Treatment",
        backref=db.backref(
            "lines", cascade="all, delete-orphan", order_by="TreatmentProduct.id"
        ),
    )
    product = db.relationship("Product")
