from flask import Blueprint, render_template, request, redirect, url_for, flash
from flask_login import login_required
from dao import patient as patient_dao
from utils.errors import PersistenceFailure

patient_bp = Blueprint("patient_web", __name__)


def _form_fields():
    return dict(
        first_name=request.form.get("first_name", ""),
        last_name=request.form.get("last_name", ""),
        email=request.form.get("email"),
        phone=request.form.get("phone"),
        date_of_birth=request.form.get("date_of_birth"),
        medical_history={"notes": request.form.get("medical_notes", "")},
        dental_history={
            "notes": request.form.get("dental_notes", ""),
            "lastCheckup": request.form.get("last_checkup") or None,
        },
    )


@patient_bp.route("/patients")
@login_required
def patients_list():
    q = request.args.get("q", "")
    patients = patient_dao.list_patients(search=q)
    return render_template("patient/patients.html", patients=patients, q=q)


@patient_bp.route("/patients/add", methods=["GET", "POST"])
@login_required
def patients_add():
    if request.method == "POST":
        try:
            p = patient_dao.create_patient(**_form_fields())
            flash("Patient added", "success")
            return redirect(url_for("patient_web.patients_edit", patient_id=p.id))
        except ValueError as e:
            flash(str(e), "warning")
        except PersistenceFailure:
            flash("Could not save the patient, please try again.", "danger")
    return render_template("patient/patient_form.html", action="add", patient=None)


@patient_bp.route("/patients/edit/<int:patient_id>", methods=["GET", "POST"])
@login_required
def patients_edit(patient_id: int):
    p = patient_dao.get_patient(patient_id)
    if not p:
        flash("Patient not found", "warning")
        return redirect(url_for("patient_web.patients_list"))
    if request.method == "POST":
        try:
            patient_dao.update_patient(patient_id, **_form_fields())
            flash("Patient updated", "success")
            return redirect(url_for("patient_web.patients_list"))
        except ValueError as e:
            flash(str(e), "warning")
        except PersistenceFailure:
            flash("Could not save the patient, please try again.", "danger")
    return render_template("patient/patient_form.html", action="edit", patient=p)


@patient_bp.route(
    "/patients/<int:patient_id>/history/<section>/<key>/add", methods=["POST"]
)
@login_required
def patients_history_add(patient_id: int, section: str, key: str):
    if key == "implants":
        entry = {
            "position": request.form.get("position", ""),
            "date": request.form.get("date", ""),
            "type": request.form.get("type", ""),
            "surgeon": request.form.get("surgeon", ""),
        }
        if not any(entry.values()):
            entry = None
    elif key == "treatments":
        entry = {
            "date": request.form.get("date", ""),
            "description": request.form.get("description", ""),
            "cost": request.form.get("cost", type=float) or 0,
        }
        if not entry["description"]:
            entry = None
    else:
        entry = request.form.get("value", "")
    try:
        patient_dao.append_history_entry(patient_id, section, key, entry)
    except ValueError as e:
        flash(str(e), "warning")
    return redirect(url_for("patient_web.patients_edit", patient_id=patient_id))


@patient_bp.route(
    "/patients/<int:patient_id>/history/<section>/<key>/<int:index>/delete",
    methods=["POST"],
)
@login_required
def patients_history_delete(patient_id: int, section: str, key: str, index: int):
    try:
        patient_dao.remove_history_entry(patient_id, section, key, index)
    except ValueError as e:
        flash(str(e), "warning")
    return redirect(url_for("patient_web.patients_edit", patient_id=patient_id))
