from datetime import date
from flask import Blueprint, render_template, request, redirect, url_for, flash, jsonify
from flask_login import login_required
from dao import treatment as treatment_dao, patient as patient_dao, product as product_dao
from dao import inventory as inv_dao
from db.models.treatment import TreatmentType
from utils.auth import current_actor_id
from utils.errors import NotAuthenticated, PersistenceFailure

treatment_bp = Blueprint("treatment_web", __name__)


def _render_form(action, treatment, lines):
    catalog = treatment_dao.current_catalog()
    return render_template(
        "treatment/treatment_form.html",
        action=action,
        treatment=treatment,
        lines=treatment_dao.line_subtotals(lines, catalog),
        total=treatment_dao.compute_total_cost(lines, catalog),
        patients=patient_dao.list_patients(),
        products=product_dao.list_products(),
        stock={
            pid: inv_dao.total_quantity(p.inventory_items) for pid, p in catalog.items()
        },
        types=list(TreatmentType),
        today=date.today().isoformat(),
    )


@treatment_bp.route("/treatments")
@login_required
def treatments_list():
    q = request.args.get("q", "")
    treatments = treatment_dao.list_treatments(search=q)
    return render_template("treatment/treatments.html", treatments=treatments, q=q)


@treatment_bp.route("/treatments/api/cost", methods=["POST"])
@login_required
def treatments_api_cost():
    """Xem trước tổng tiền + cảnh báo tồn khi đang nhập form."""
    payload = request.get_json(silent=True) or {}
    try:
        lines = []
        for ln in payload.get("lines", []):
            lines = treatment_dao.add_line(lines, ln.get("product_id"), ln.get("quantity"))
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    catalog = treatment_dao.current_catalog()
    rows = treatment_dao.line_subtotals(lines, catalog)
    return jsonify(
        {
            "lines": [
                {
                    "product_id": r["product_id"],
                    "name": r["name"],
                    "quantity": r["quantity"],
                    "unit_price": float(r["unit_price"]),
                    "subtotal": float(r["subtotal"]),
                }
                for r in rows
            ],
            "total": float(treatment_dao.compute_total_cost(lines, catalog)),
            "stock_errors": treatment_dao.validate_stock(
                lines, inv_dao.list_inventory_items(), catalog
            ),
        }
    )


@treatment_bp.route("/treatments/add", methods=["GET", "POST"])
@login_required
def treatments_add():
    lines = []
    if request.method == "POST":
        lines = _extract_lines(request)
        try:
            treatment_dao.create_treatment(
                patient_id=request.form.get("patient_id"),
                date=request.form.get("date"),
                type=request.form.get("type"),
                notes=request.form.get("notes"),
                lines=lines,
                actor_id=current_actor_id(),
            )
            flash("Treatment saved", "success")
            return redirect(url_for("treatment_web.treatments_list"))
        except ValueError as e:
            flash(str(e), "warning")
        except NotAuthenticated:
            flash("Please sign in again.", "danger")
            return redirect(url_for("auth.login"))
        except PersistenceFailure:
            flash("Could not save the treatment, please try again.", "danger")
    return _render_form("add", None, _safe_lines(lines))


@treatment_bp.route("/treatments/edit/<int:treatment_id>", methods=["GET", "POST"])
@login_required
def treatments_edit(treatment_id: int):
    t = treatment_dao.get_treatment(treatment_id)
    if not t:
        flash("Treatment not found", "warning")
        return redirect(url_for("treatment_web.treatments_list"))
    lines = treatment_dao.lines_of(t)
    if request.method == "POST":
        lines = _extract_lines(request)
        try:
            treatment_dao.update_treatment(
                treatment_id,
                patient_id=request.form.get("patient_id"),
                date=request.form.get("date"),
                type=request.form.get("type"),
                notes=request.form.get("notes"),
                lines=lines,
            )
            flash("Treatment updated", "success")
            return redirect(url_for("treatment_web.treatments_list"))
        except ValueError as e:
            flash(str(e), "warning")
        except PersistenceFailure:
            flash("Could not save the treatment, please try again.", "danger")
    return _render_form("edit", t, _safe_lines(lines))


@treatment_bp.route("/treatments/delete/<int:treatment_id>", methods=["POST"])
@login_required
def treatments_delete(treatment_id: int):
    try:
        treatment_dao.delete_treatment(treatment_id)
        flash("Treatment deleted", "success")
    except PersistenceFailure:
        flash("Could not delete the treatment, please try again.", "danger")
    return redirect(url_for("treatment_web.treatments_list"))


def _extract_lines(req):
    lines = []
    for key in req.form:
        if key.startswith("lines[") and key.endswith("][product_id]"):
            idx = key.split("[")[1].split("]")[0]
            product_id = req.form.get(f"lines[{idx}][product_id]")
            qty = req.form.get(f"lines[{idx}][quantity]")
            # dòng có sản phẩm mà thiếu số lượng vẫn giữ lại để add_line báo lỗi
            if product_id:
                lines.append({"product_id": product_id, "quantity": qty})
    return lines


def _safe_lines(lines):
    # form lỗi vẫn hiển thị lại các dòng hợp lệ
    out = []
    for ln in lines:
        try:
            out = treatment_dao.add_line(out, ln["product_id"], ln["quantity"])
        except ValueError:
            continue
    return out
