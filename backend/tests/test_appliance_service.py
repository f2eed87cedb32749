"""Tests for ApplianceService and power classification."""

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from sqlalchemy.exc import OperationalError

from intelliwatt.exceptions import ValidationError
from intelliwatt.models.appliance import Appliance
from intelliwatt.services.appliance_service import ApplianceService, power_category


@pytest_asyncio.fixture
async def appliance_service():
    return ApplianceService()


@pytest.mark.parametrize(
    "power_w, expected",
    [
        (0, "Low Power"),
        (199.9, "Low Power"),
        (200, "Medium Power"),
        (300, "Medium Power"),
        (999, "Medium Power"),
        (1000, "High Power"),
        (2500, "High Power"),
        (float("nan"), "Low Power"),
    ],
)
def test_power_category(power_w, expected):
    assert power_category(power_w) == expected


def test_category_is_not_a_column():
    assert "category" not in Appliance.__table__.columns.keys()


@pytest.mark.asyncio
async def test_create_and_list_newest_first(db_session, appliance_service):
    await appliance_service.create_appliance(db_session, "Fan", 75)
    await appliance_service.create_appliance(db_session, " Aircon ", 1500)

    appliances = await appliance_service.list_appliances(db_session)
    assert [a.name for a in appliances] == ["Aircon", "Fan"]
    assert [a.category for a in appliances] == ["High Power", "Low Power"]


@pytest.mark.asyncio
async def test_category_follows_stored_power(db_session, appliance_service):
    """Category is recomputed from power_w on each read."""
    created = await appliance_service.create_appliance(db_session, "Heater", 150)
    assert created.category == "Low Power"

    row = await db_session.get(Appliance, created.id)
    row.power_w = 1200
    await db_session.commit()

    appliances = await appliance_service.list_appliances(db_session)
    assert appliances[0].category == "High Power"


@pytest.mark.asyncio
@pytest.mark.parametrize("name, power_w", [("", 100), ("   ", 100), ("Fan", None), ("Fan", float("inf")), ("Fan", -1)])
async def test_create_rejects_invalid(db_session, appliance_service, name, power_w):
    with pytest.raises(ValidationError):
        await appliance_service.create_appliance(db_session, name, power_w)
    assert await appliance_service.list_appliances(db_session) == []


@pytest.mark.asyncio
async def test_delete(db_session, appliance_service):
    created = await appliance_service.create_appliance(db_session, "Ref", 150)
    assert await appliance_service.delete_appliance(db_session, created.id) is True
    assert await appliance_service.delete_appliance(db_session, created.id) is False
    assert await appliance_service.list_appliances(db_session) == []


@pytest.mark.asyncio
async def test_reload_failure_after_commit_keeps_appliance(appliance_service):
    db = MagicMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.refresh = AsyncMock(side_effect=OperationalError("SELECT 1", {}, Exception("gone")))

    created = await appliance_service.create_appliance(db, "Kettle", 2200)

    assert created.name == "Kettle"
    assert created.category == "High Power"
    db.rollback.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_accepts_numeric_string(db_session, appliance_service):
    created = await appliance_service.create_appliance(db_session, "TV", "250")
    assert created.power_w == 250.0
    assert created.category == "Medium Power"
