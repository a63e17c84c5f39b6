from loguru import logger
from sqlalchemy.orm import Session

from models.user import User
from services.auth_service import hash_password

DEMO_PASSWORD = "Password123!"
DEMO_USER_EMAIL = "demo.user@aiphysio.app"


def seed_demo_data(db: Session) -> None:
    user = db.query(User).filter(User.email == DEMO_USER_EMAIL).first()
    if user:
        return

    db.add(
        User(
            email=DEMO_USER_EMAIL,
            name="Demo User",
            hashed_password=hash_password(DEMO_PASSWORD),
        )
    )
    db.commit()
    logger.info(f"Seeded demo user {DEMO_USER_EMAIL}")
