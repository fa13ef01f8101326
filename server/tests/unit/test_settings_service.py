"""Unit tests for site settings."""

import pytest

from voyage.core.exceptions import ValidationError
from voyage.schemas.settings import SettingsKey
from voyage.services.settings_service import SettingsService


@pytest.mark.asyncio
async def test_get_all_when_nothing_saved(test_session):
    """Unsaved groups come back empty."""
    settings = await SettingsService(test_session).get_all()

    assert settings.general is None
    assert settings.social is None
    assert settings.homepage is None


@pytest.mark.asyncio
async def test_save_and_read_group(test_session):
    """A saved group is returned with camelCase keys and defaults filled in."""
    service = SettingsService(test_session)

    saved = await service.save(SettingsKey.GENERAL, {
        "siteName": "Infinity Voyage Tours & Safaris",
        "phone": "+255 758 241 294",
    })
    settings = await service.get_all()

    assert saved["siteName"] == "Infinity Voyage Tours & Safaris"
    assert saved["tagline"] == ""
    assert settings.general == saved
    assert settings.social is None


@pytest.mark.asyncio
async def test_save_overwrites_whole_group(test_session):
    """Saving again replaces the previous value; the last save wins."""
    service = SettingsService(test_session)

    await service.save(SettingsKey.SOCIAL, {"instagram": "https://instagram.com/infinityvoyage"})
    await service.save(SettingsKey.SOCIAL, {"facebook": "https://facebook.com/infinityvoyage"})
    settings = await service.get_all()

    assert settings.social["facebook"] == "https://facebook.com/infinityvoyage"
    assert settings.social["instagram"] == ""


@pytest.mark.asyncio
async def test_save_accepts_snake_case_and_drops_unknown_keys(test_session):
    service = SettingsService(test_session)

    saved = await service.save(SettingsKey.HOMEPAGE, {"hero_title": "Karibu", "showPackages": False, "colour": "gold"})

    assert saved["heroTitle"] == "Karibu"
    assert saved["showPackages"] is False
    assert saved["showTestimonials"] is True
    assert "colour" not in saved


@pytest.mark.asyncio
async def test_save_invalid_value(test_session):
    """Values of the wrong type are rejected with the offending path."""
    service = SettingsService(test_session)

    with pytest.raises(ValidationError) as exc_info:
        await service.save(SettingsKey.HOMEPAGE, {"showPackages": "sometimes"})

    assert exc_info.value.extensions["violations"][0]["path"] == "showPackages"
