import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from nutrichat_app.database.models import Base, User, UserProfile, UserHealth


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
def db(engine):
    Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = Session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user(db):
    """Male, 30y, 80kg, 180cm, sedentary, maintenance."""
    u = User(first_name="Alex", last_name="Doe", email="alex@example.com")
    u.profile = UserProfile(weight=80.0, height=180.0, age=30, sex="MALE")
    u.health = UserHealth(
        activity_level="SEDENTARY",
        goal="MAINTENANCE",
        dietary_restrictions="vegetarian,gluten-free",
        medical_conditions="",
        allergies="peanuts",
    )
    db.add(u)
    db.commit()
    db.refresh(u)
    return u


@pytest.fixture
def bare_user(db):
    """User without profile or health rows."""
    u = User(first_name="Sam", email="sam@example.com")
    db.add(u)
    db.commit()
    db.refresh(u)
    return u
