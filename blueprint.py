from index import main_bp
from routes.auth import auth_bp
from routes.patient import patient_bp
from routes.supplier import supplier_bp
from routes.product import product_bp
from routes.inventory import inventory_bp
from routes.treatment import treatment_bp
from routes.alerts import alerts_bp
from routes.finance import finance_bp


def blue_print(app):
    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(patient_bp)
    app.register_blueprint(supplier_bp)
    app.register_blueprint(product_bp)
    app.register_blueprint(inventory_bp)
    app.register_blueprint(treatment_bp)
    app.register_blueprint(alerts_bp)
    app.register_blueprint(finance_bp)
