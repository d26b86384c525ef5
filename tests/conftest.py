"""Фикстуры тестов: SQLite в памяти, TestClient и фабрики записей"""
import os

os.environ["DATABASE_URL"] = "sqlite://"

from datetime import timedelta
from decimal import Decimal
from itertools import count

import pytest
from fastapi.testclient import TestClient

from estatehub.database import Base, SessionLocal, engine
from estatehub.main import app
from estatehub.models import Agency, Enquiry, Property, PropertyImage, User
from estatehub.models.enums import AgencyStatus, UserRole

from support import BASE_TIME


@pytest.fixture
def db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db):
    return TestClient(app)


@pytest.fixture
def make_agency(db):
    def _make(slug="acme", status=AgencyStatus.ACTIVE.value, **kwargs):
        agency = Agency(
            name=kwargs.pop("name", slug.title()),
            slug=slug,
            email=kwargs.pop("email", f"info@{slug}.co.uk"),
            status=status,
            **kwargs
        )
        db.add(agency)
        db.commit()
        db.refresh(agency)
        return agency
    return _make


@pytest.fixture
def make_user(db):
    emails = count(1)

    def _make(agency=None, role=UserRole.AGENCY_ADMIN.value, **kwargs):
        user = User(
            email=kwargs.pop("email", f"user{next(emails)}@example.com"),
            name=kwargs.pop("name", "Test User"),
            role=role,
            agency_id=agency.id if agency else None,
            **kwargs
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make


@pytest.fixture
def make_property(db):
    minutes = count(0)
    slugs = count(1)

    def _make(agency, **kwargs):
        title = kwargs.pop("title", "Bright family home")
        property_obj = Property(
            agency_id=agency.id,
            slug=kwargs.pop("slug", f"{title.lower().replace(' ', '-')}-{next(slugs)}"),
            title=title,
            description=kwargs.pop("description", "A well presented property close to local amenities."),
            status=kwargs.pop("status", "FOR_SALE"),
            address_line1=kwargs.pop("address_line1", "1 High Street"),
            city=kwargs.pop("city", "London"),
            postcode=kwargs.pop("postcode", "SW1A 1AA"),
            latitude=kwargs.pop("latitude", 51.5),
            longitude=kwargs.pop("longitude", -0.12),
            price=kwargs.pop("price", Decimal("300000")),
            property_type=kwargs.pop("property_type", "HOUSE"),
            bedrooms=kwargs.pop("bedrooms", 3),
            is_published=kwargs.pop("is_published", True),
            created_at=kwargs.pop("created_at", BASE_TIME + timedelta(minutes=next(minutes))),
            key_features=kwargs.pop("key_features", []),
            **kwargs
        )
        db.add(property_obj)
        db.commit()
        db.refresh(property_obj)
        return property_obj
    return _make


@pytest.fixture
def make_image(db):
    def _make(property_obj, sort_order, **kwargs):
        image = PropertyImage(
            property_id=property_obj.id,
            url=kwargs.pop("url", f"https://img.example.com/{property_obj.id}/{sort_order}.jpg"),
            sort_order=sort_order,
            **kwargs
        )
        db.add(image)
        db.commit()
        db.refresh(image)
        return image
    return _make


@pytest.fixture
def make_enquiry(db):
    minutes = count(0)

    def _make(property_obj, **kwargs):
        enquiry = Enquiry(
            property_id=property_obj.id,
            agency_id=property_obj.agency_id,
            name=kwargs.pop("name", "Jane Buyer"),
            email=kwargs.pop("email", "jane@example.com"),
            message=kwargs.pop("message", "Is the property still available?"),
            created_at=kwargs.pop("created_at", BASE_TIME + timedelta(minutes=next(minutes))),
            **kwargs
        )
        db.add(enquiry)
        db.commit()
        db.refresh(enquiry)
        return enquiry
    return _make
