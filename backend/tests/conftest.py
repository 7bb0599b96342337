import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import models.employee  # noqa: F401
import models.users  # noqa: F401
from database import Base, get_db
from main import create_app
from models.users import User, UserRole
from repositories.employees import EmployeeRepository
from repositories.users import UserRepository
from services.auth import AuthService
from services.employees import EmployeeService
from utils.tokenJWT import token_service


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def employee_service(db):
    return EmployeeService(EmployeeRepository(db))


@pytest.fixture
def auth_service(db):
    return AuthService(UserRepository(db), token_service)


@pytest.fixture
def app(session_factory):
    app = create_app(initialize_db=False)

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def bearer_headers():
    # Bearer identity is taken from token claims, no stored user is needed
    user = User(id=999, username="tester", email="tester@company.com", role=UserRole.ADMIN)
    return {"Authorization": f"Bearer {token_service.create_access_token(user)}"}
