import os

from dashboard import create_app, create_admin_user, db
from dashboard.models import Customer

DEMO_CUSTOMERS = [
    ("Evil Rabbit", "evil@rabbit.com"),
    ("Delba de Oliveira", "delba@oliveira.com"),
    ("Lee Robinson", "lee@robinson.com"),
    ("Michael Novotny", "michael@novotny.com"),
    ("Amy Burns", "amy@burns.com"),
    ("Balazs Orban", "balazs@orban.com"),
]


def seed_initial_data() -> None:
    """Seed the database with an admin user and demo customers."""
    app = create_app([])
    with app.app_context():
        create_admin_user()
        if os.getenv("SEED_CUSTOMERS", "1") != "0":
            for name, email in DEMO_CUSTOMERS:
                if Customer.query.filter_by(email=email).first() is None:
                    db.session.add(Customer(name=name, email=email))
        db.session.commit()
        print("Initial admin user and customers created.")


if __name__ == "__main__":
    seed_initial_data()
