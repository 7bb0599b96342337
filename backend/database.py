# backend/database.py
import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from config import settings

logger = logging.getLogger(__name__)

# 1. Database address from settings (environment or .env), SQLite by default
SQLALCHEMY_DATABASE_URL = settings.DATABASE_URL

# 2. Hosted Postgres URLs use postgres://, SQLAlchemy requires postgresql://
if SQLALCHEMY_DATABASE_URL and SQLALCHEMY_DATABASE_URL.startswith("postgres://"):
    SQLALCHEMY_DATABASE_URL = SQLALCHEMY_DATABASE_URL.replace("postgres://", "postgresql://", 1)

# 3. Dialect specific connection options
if "sqlite" in SQLALCHEMY_DATABASE_URL:
    connect_args = {"check_same_thread": False} # SQLite only
else:
    connect_args = {}

engine = create_engine(
    SQLALCHEMY_DATABASE_URL, connect_args=connect_args
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def seed_admin(db: Session) -> bool:
    """Create the bootstrap admin account if it does not exist yet.

    Returns True when a row was inserted.
    """
    from models.users import User, UserRole
    from utils.hashing import get_password_hash

    exists = db.query(User).filter(User.username == settings.SEED_ADMIN_USERNAME).first()
    if exists:
        return False

    admin = User(
        username=settings.SEED_ADMIN_USERNAME,
        email=settings.SEED_ADMIN_EMAIL,
        password_hash=get_password_hash(settings.SEED_ADMIN_PASSWORD),
        role=UserRole.ADMIN,
        is_active=True,
    )
    db.add(admin)
    db.commit()
    logger.info("Seeded default admin account '%s'", admin.username)
    return True


def init_db(bind=None):
    # Register models on Base.metadata before creating tables
    import models.users  # noqa: F401
    import models.employee  # noqa: F401

    bind = bind or engine
    Base.metadata.create_all(bind=bind)

    db = Session(bind=bind)
    try:
        seed_admin(db)
    finally:
        db.close()
