"""
Student Transport Fees - Test Configuration and Fixtures
"""
import os
from datetime import date
from decimal import Decimal
from typing import Callable, Generator, Iterable, Optional

import pytest
from faker import Faker
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Set testing environment
os.environ['ENVIRONMENT'] = 'testing'
os.environ['DATABASE_URL'] = 'sqlite://'
os.environ['LOG_LEVEL'] = 'WARNING'

from app.api.deps import get_current_date
from app.db.base import Base
from app.db.session import get_db
from app.models.transport import Route, SemesterFee, Student
from app.main import app

fake = Faker()

# December falls in term 2 of academic year 2025-26
TODAY = date(2025, 12, 10)
ACADEMIC_YEAR = "2025-26"

# Test database setup
test_engine = create_engine(
    'sqlite://',
    connect_args={'check_same_thread': False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(bind=test_engine, autocommit=False, autoflush=False)


@pytest.fixture(scope='function')
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database for each test"""
    Base.metadata.create_all(bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Create test client with database and clock overrides"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_date] = lambda: TODAY

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def route(db_session: Session) -> Route:
    """Create an active route"""
    route = Route(
        route_number=fake.unique.bothify('R-###'),
        route_name=f"{fake.city()} Express",
        start_location=fake.city(),
        end_location="Main Campus",
        is_active=True,
    )
    db_session.add(route)
    db_session.commit()
    db_session.refresh(route)
    return route


@pytest.fixture
def stop_name() -> str:
    return f"{fake.street_name()} Junction"


@pytest.fixture
def make_student(db_session: Session) -> Callable[..., Student]:
    """Factory for students, optionally allocated to a route"""
    def _make(route: Optional[Route] = None, stop: Optional[str] = None,
              use_legacy_stop: bool = False) -> Student:
        student = Student(
            full_name=fake.name(),
            roll_number=fake.unique.bothify('CS####'),
            email=fake.email(),
            mobile=fake.numerify('9#########'),
            allocated_route_id=route.id if route else None,
            boarding_point=None if use_legacy_stop else stop,
            boarding_stop=stop if use_legacy_stop else None,
        )
        db_session.add(student)
        db_session.commit()
        db_session.refresh(student)
        return student

    return _make


@pytest.fixture
def student(make_student, route: Route, stop_name: str) -> Student:
    return make_student(route, stop_name)


@pytest.fixture
def make_fees(db_session: Session) -> Callable[..., list]:
    """Factory for active per-term fee rows"""
    def _make(route: Route, stop: str, fees: Iterable = (1000, 1000, 1000),
              discount: Optional[Decimal] = Decimal("5"),
              academic_year: str = ACADEMIC_YEAR) -> list:
        rows = []
        for term, fee in zip(("1", "2", "3"), fees):
            if fee is None:
                continue
            rows.append(SemesterFee(
                allocated_route_id=route.id,
                stop_name=stop,
                academic_year=academic_year,
                semester=term,
                semester_fee=Decimal(str(fee)),
                full_year_discount_percent=discount,
                is_active=True,
            ))
        db_session.add_all(rows)
        db_session.commit()
        return rows

    return _make


@pytest.fixture
def fees(make_fees, route: Route, stop_name: str) -> list:
    return make_fees(route, stop_name)


@pytest.fixture
def payment_body(student: Student, route: Route, stop_name: str) -> Callable[..., dict]:
    """Build a camelCase payment creation body for the default student"""
    def _body(payment_type: str = "term", term: Optional[str] = "2", **overrides) -> dict:
        body = {
            "studentId": student.id,
            "paymentType": payment_type,
            "routeId": route.id,
            "stopName": stop_name,
        }
        if term is not None:
            body["termNumber"] = term
        body.update(overrides)
        return body

    return _body
