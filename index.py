# index.py
from datetime import datetime
from flask import Blueprint, render_template
from flask_login import login_required, current_user
from dao import report as report_dao

main_bp = Blueprint("main", __name__)


@main_bp.app_context_processor
def inject_now():
    ctx = {"current_year": datetime.now().year, "has_alerts": False}
    # chấm đỏ trên header khi có sản phẩm cần đặt hàng lại
    if current_user and current_user.is_authenticated:
        ctx["has_alerts"] = bool(report_dao.fetch_low_stock_products())
    return ctx


@main_bp.route("/")
@login_required
def home():
    stats = report_dao.fetch_dashboard_stats(datetime.now())
    return render_template("index.html", stats=stats)
