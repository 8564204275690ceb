from datetime import datetime
from flask import Blueprint, render_template, request
from flask_login import login_required
from utils.auth import roles_required
from dao import report as report_dao
from db.models.treatment import TreatmentType
from db.models.user import UserRole

finance_bp = Blueprint("finance_web", __name__)


@finance_bp.route("/finance")
@login_required
@roles_required(UserRole.ADMIN, UserRole.DENTIST, UserRole.ACCOUNTANT)
def finance_overview():
    period = request.args.get("period", "month")
    if period not in report_dao.PERIODS:
        period = "month"
    stats = report_dao.fetch_finance_stats(period, datetime.now())
    return render_template(
        "finance/finance.html",
        stats=stats,
        periods=report_dao.PERIODS,
        types=list(TreatmentType),
    )
