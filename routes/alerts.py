from flask import Blueprint, render_template, jsonify
from flask_login import login_required
from dao import report as report_dao, inventory as inv_dao

alerts_bp = Blueprint("alerts_web", __name__)


@alerts_bp.route("/alerts")
@login_required
def alerts_list():
    rows = [
        {
            "product": p,
            "on_hand": inv_dao.total_quantity(p.inventory_items),
            "deficit": inv_dao.deficit(p, p.inventory_items),
        }
        for p in report_dao.fetch_low_stock_products()
    ]
    return render_template("alerts/alerts.html", rows=rows)


@alerts_bp.route("/alerts/api/count")
@login_required
def alerts_api_count():
    return jsonify({"count": len(report_dao.fetch_low_stock_products())})
