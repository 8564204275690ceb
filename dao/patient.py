# dao/patient.py
import copy
import logging
from datetime import datetime, date
from typing import List, Optional
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm.attributes import flag_modified
from configs import db
from db.models.patient import Patient, empty_medical_history, empty_dental_history
from utils.errors import PersistenceFailure, ValidationError

logger = logging.getLogger(__name__)

# tên list con được phép sửa theo index
HISTORY_LISTS = {
    "medical_history": ("allergies", "conditions", "medications"),
    "dental_history": ("implants", "treatments"),
}


def _parse_date(s) -> Optional[date]:
    if not s:
        return None
    if isinstance(s, date):
        return s
    try:
        return datetime.strptime(s, "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError("Dates must use the YYYY-MM-DD format.")


def _merge_history(defaults: dict, value: Optional[dict]) -> dict:
    merged = defaults
    for k, v in (value or {}).items():
        merged[k] = v
    return merged


def list_patients(search: Optional[str] = None) -> List[Patient]:
    q = Patient.query
    term = (search or "").strip()
    if term:
        like = f"%{term}%"
        q = q.filter(
            or_(
                (Patient.first_name + " " + Patient.last_name).ilike(like),
                Patient.email.ilike(like),
                Patient.phone.like(like),
            )
        )
    return q.order_by(Patient.created_at.desc(), Patient.id.desc()).all()


def get_patient(patient_id: int) -> Optional[Patient]:
    return Patient.query.get(patient_id)


def create_patient(
    first_name: str,
    last_name: str,
    email: str | None = None,
    phone: str | None = None,
    date_of_birth=None,
    medical_history: dict | None = None,
    dental_history: dict | None = None,
) -> Patient:
    first_name, last_name = (first_name or "").strip(), (last_name or "").strip()
    if not first_name or not last_name:
        raise ValidationError("First and last name are required.")
    p = Patient(
        first_name=first_name,
        last_name=last_name,
        email=email or None,
        phone=phone or None,
        date_of_birth=_parse_date(date_of_birth),
        medical_history=_merge_history(empty_medical_history(), medical_history),
        dental_history=_merge_history(empty_dental_history(), dental_history),
    )
    db.session.add(p)
    _commit()
    return p


def update_patient(patient_id: int, **fields) -> Patient:
    p = Patient.query.get_or_404(patient_id)
    for k in ("first_name", "last_name"):
        if k in fields:
            fields[k] = (fields[k] or "").strip()
            if not fields[k]:
                raise ValidationError("First and last name are required.")
    # chuỗi rỗng -> NULL
    for k in ("email", "phone"):
        if k in fields:
            fields[k] = fields[k] or None
    if "date_of_birth" in fields:
        fields["date_of_birth"] = _parse_date(fields["date_of_birth"])
    for k in ("medical_history", "dental_history"):
        if k in fields:
            current = copy.deepcopy(dict(getattr(p, k) or {}))
            fields[k] = _merge_history(current, fields[k])
    for k, v in fields.items():
        setattr(p, k, v)
    _commit()
    return p


def set_last_checkup(patient_id: int, when) -> Patient:
    p = Patient.query.get_or_404(patient_id)
    history = p.dental_history if p.dental_history is not None else empty_dental_history()
    if isinstance(when, (datetime, date)):
        when = when.isoformat()
    history["lastCheckup"] = when or None
    p.dental_history = history
    flag_modified(p, "dental_history")
    _commit()
    return p


def _history_list(p: Patient, section: str, key: str) -> list:
    if key not in HISTORY_LISTS.get(section, ()):
        raise ValidationError(f"Unknown history list: {section}.{key}")
    if getattr(p, section) is None:
        defaults = (
            empty_medical_history() if section == "medical_history" else empty_dental_history()
        )
        setattr(p, section, defaults)
    history = getattr(p, section)
    history.setdefault(key, [])
    return history[key]


def append_history_entry(patient_id: int, section: str, key: str, entry) -> Patient:
    """Thêm 1 phần tử vào list con (allergies, implants, ...)."""
    p = Patient.query.get_or_404(patient_id)
    if isinstance(entry, str):
        entry = entry.strip()
    if not entry:
        raise ValidationError("Entry cannot be empty.")
    _history_list(p, section, key).append(entry)
    flag_modified(p, section)  # MutableDict không thấy list lồng bên trong đổi
    _commit()
    return p


def remove_history_entry(patient_id: int, section: str, key: str, index: int) -> Patient:
    p = Patient.query.get_or_404(patient_id)
    items = _history_list(p, section, key)
    try:
        i = int(index)
        if i < 0:
            raise IndexError(i)
        items.pop(i)
    except (IndexError, ValueError):
        raise ValidationError("No entry at that position.")
    flag_modified(p, section)
    _commit()
    return p


def _commit():
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("Patient commit failed")
        raise PersistenceFailure("Could not save the patient.") from e
