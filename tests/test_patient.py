import pytest

from dao import patient as patient_dao
from utils.errors import ValidationError


@pytest.fixture
def patient(database):
    return patient_dao.create_patient(
        first_name="Marie", last_name="Dupont", email="", phone="", date_of_birth=""
    )


def test_create_normalises_blank_fields_and_histories(patient):
    assert patient.email is None
    assert patient.phone is None
    assert patient.date_of_birth is None
    assert patient.medical_history == {
        "notes": "",
        "allergies": [],
        "conditions": [],
        "medications": [],
    }
    assert patient.dental_history["implants"] == []
    assert patient.dental_history["lastCheckup"] is None


def test_names_required(database):
    with pytest.raises(ValidationError):
        patient_dao.create_patient(first_name=" ", last_name="Dupont")


def test_append_and_remove_by_index(patient):
    patient_dao.append_history_entry(patient.id, "medical_history", "allergies", "latex")
    patient_dao.append_history_entry(patient.id, "medical_history", "allergies", "pénicilline")
    patient_dao.remove_history_entry(patient.id, "medical_history", "allergies", 0)

    reloaded = patient_dao.get_patient(patient.id)
    assert reloaded.medical_history["allergies"] == ["pénicilline"]


def test_append_implant_record(patient):
    implant = {"position": "36", "date": "2026-01-10", "type": "Titane", "surgeon": "Dr. Leroy"}
    patient_dao.append_history_entry(patient.id, "dental_history", "implants", implant)
    assert patient_dao.get_patient(patient.id).dental_history["implants"] == [implant]


def test_unknown_list_and_bad_index_rejected(patient):
    with pytest.raises(ValidationError):
        patient_dao.append_history_entry(patient.id, "medical_history", "hobbies", "golf")
    with pytest.raises(ValidationError):
        patient_dao.remove_history_entry(patient.id, "medical_history", "allergies", 0)
    with pytest.raises(ValidationError):
        patient_dao.remove_history_entry(patient.id, "medical_history", "allergies", -1)


def test_update_merges_history_and_keeps_lists(patient):
    patient_dao.append_history_entry(patient.id, "medical_history", "allergies", "latex")
    patient_dao.update_patient(
        patient.id,
        phone="0601020304",
        medical_history={"notes": "asthme"},
        dental_history={"lastCheckup": "2026-10-19"},
    )
    p = patient_dao.get_patient(patient.id)
    assert p.phone == "0601020304"
    assert p.medical_history["notes"] == "asthme"
    assert p.medical_history["allergies"] == ["latex"]
    assert p.dental_history["lastCheckup"] == "2026-10-19"


def test_set_last_checkup(patient):
    patient_dao.set_last_checkup(patient.id, "2026-10-19T10:00:00")
    assert patient_dao.get_patient(patient.id).dental_history["lastCheckup"] == "2026-10-19T10:00:00"


def test_search(patient):
    patient_dao.create_patient(first_name="Jean", last_name="Martin", phone="0605060708")
    assert [p.first_name for p in patient_dao.list_patients(search="marie dupont")] == ["Marie"]
    assert [p.first_name for p in patient_dao.list_patients(search="0605")] == ["Jean"]
    assert len(patient_dao.list_patients()) == 2
