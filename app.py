import logging
import os
from flask import Flask
from configs import db, login

from dotenv import load_dotenv
from db.models.user import User, UserRole
from blueprint import blue_print
from admin.setup import init_admin
from utils.formatting import format_currency, format_date

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = Flask(__name__, template_folder="templates", static_folder="static")
app.secret_key = os.getenv("SECRET_KEY", "dev_secret")
app.config["SQLALCHEMY_DATABASE_URI"] = os.getenv("DATABASE_URL", "sqlite:///clinic.db")
app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False


db.init_app(app)
login.init_app(app)
login.login_view = "auth.login"

app.add_template_filter(format_currency, "currency")
app.add_template_filter(format_date, "date_fr")


@app.context_processor
def inject_enums():
    return dict(UserRole=UserRole)


@login.user_loader
def load_user(user_id):
    return db.session.get(User, int(user_id))


init_admin(app)  # tạo /manage
blue_print(app)  # đăng ký các blueprint khác

if __name__ == "__main__":
    app.run(debug=True, host="0.0.0.0", port=5000)
