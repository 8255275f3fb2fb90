from __future__ import annotations

from collections.abc import Generator

import pytest
from sqlalchemy import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from src.identity_gateway.core.models import ExternalUserProfile, InternalRecord
from src.identity_gateway.runtime.config.config_data import (
    ConfigData,
    IdentityConfig,
    PlatformConfig,
)

_BASE_URL = "https://platform.test"
_APP_ID = "AK-test-app"
_APP_SECRET = "Secret-KEY-123"


@pytest.fixture
def platform_config() -> PlatformConfig:
    return PlatformConfig(
        base_url=_BASE_URL,
        app_id=_APP_ID,
        app_secret=_APP_SECRET,
        request_timeout=5.0,
    )


@pytest.fixture
def unconfigured_platform_config() -> PlatformConfig:
    return PlatformConfig(base_url=_BASE_URL, app_id="", app_secret="")


@pytest.fixture
def identity_config() -> IdentityConfig:
    return IdentityConfig()


@pytest.fixture
def test_config(platform_config: PlatformConfig) -> ConfigData:
    """Application configuration for tests; nothing touches disk."""
    config = ConfigData()
    config.app.environment = "test"
    config.platform = platform_config
    config.database.url = "sqlite:///:memory:"
    config.logging.file = ""
    return config


@pytest.fixture
def student_profile() -> ExternalUserProfile:
    return ExternalUserProfile(
        nickname="Alice",
        openid="OID1",
        external_union_id="S12345",
    )


@pytest.fixture
def teacher_record() -> InternalRecord:
    return InternalRecord(
        id="T001",
        display_name="Bob Li",
        role="teacher",
        external_number="T001",
        org_unit_name="School of Statistics",
    )


@pytest.fixture
def student_record() -> InternalRecord:
    return InternalRecord(
        id="S12345",
        display_name="Alice Zhang",
        role="student",
        external_number="S12345",
        org_unit_name="School of Statistics",
        major_name="Data Science",
        class_name="Data Science 2401",
    )


@pytest.fixture
def session() -> Generator[Session]:
    """Fresh in-memory database session with the contact table created."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Registers the table on the metadata
    from src.identity_gateway.entities.core.contact import ContactTable  # noqa: F401

    SQLModel.metadata.create_all(engine)

    with Session(engine) as session:
        try:
            yield session
        finally:
            session.rollback()
            session.close()
            engine.dispose()
