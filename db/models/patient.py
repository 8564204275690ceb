from configs import db
from datetime import datetime
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.mutable import MutableDict

# JSONB trên Postgres, JSON thường khi chạy SQLite (test)
JSONType = db.JSON().with_variant(JSONB, "postgresql")


def empty_medical_history() -> dict:
    return {"notes": "", "allergies": [], "conditions": [], "medications": []}


def empty_dental_history() -> dict:
    return {"notes": "", "implants": [], "treatments": [], "lastCheckup": None}


class Patient(db.Model):
    __tablename__ = "patient"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    first_name = db.Column(db.String(120), nullable=False)
    last_name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(255))
    phone = db.Column(db.String(30))
    date_of_birth = db.Column(db.Date)

    medical_history = db.Column(
        MutableDict.as_mutable(JSONType), default=empty_medical_history
    )
    dental_history = db.Column(
        MutableDict.as_mutable(JSONType), default=empty_dental_history
    )

    created_at = db.Column(db.DateTime, default=datetime.now)
    updated_at = db.Column(db.DateTime, default=datetime.now, onupdate=datetime.now)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
