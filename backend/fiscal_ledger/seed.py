import logging
import os

from sqlalchemy import select

from fiscal_ledger.core.config import settings
from fiscal_ledger.core.security import hash_password
from fiscal_ledger.db.session import SessionLocal
from fiscal_ledger.models.user import User
from fiscal_ledger.services.ledger_settings import get_settings_record, save_settings
from fiscal_ledger.services.store import SqlDocumentStore

logger = logging.getLogger(__name__)


def main():
    username = os.environ.get("SEED_ADMIN_USER", "admin")
    password = os.environ.get("SEED_ADMIN_PASS", "admin123")

    db = SessionLocal()
    try:
        if db.execute(select(User).where(User.username == username)).scalar_one_or_none() is None:
            db.add(User(username=username, password_hash=hash_password(password), role="admin"))
            db.commit()
            logger.info("created admin user %s", username)

        store = SqlDocumentStore(db)
        if get_settings_record(store) is None:
            save_settings(
                store,
                {
                    "savings_interest_rate": settings.default_savings_interest_rate,
                    "loan_interest_rate": settings.default_loan_interest_rate,
                    "fiscal_year_start": settings.fiscal_years[0] if settings.fiscal_years else None,
                    "currency_symbol": "Rs.",
                },
            )
            logger.info("created default ledger settings")
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
