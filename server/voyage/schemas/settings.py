"""Site settings schemas."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SettingsKey(str, Enum):
    """Settings groups."""
    GENERAL = "general"
    SOCIAL = "social"
    HOMEPAGE = "homepage"


class _SettingsGroup(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GeneralSettings(_SettingsGroup):
    """Company identity and contact details."""

    site_name: str = ""
    tagline: str = ""
    logo: str | None = None
    favicon: str | None = None
    email: str = ""
    phone: str = ""
    whatsapp: str = ""
    address: str = ""


class SocialSettings(_SettingsGroup):
    """Social profile links."""

    facebook: str = ""
    instagram: str = ""
    twitter: str = ""
    youtube: str = ""
    tripadvisor: str = ""
    tiktok: str = ""


class HomepageSettings(_SettingsGroup):
    """Homepage hero and section toggles."""

    hero_title: str = ""
    hero_subtitle: str = ""
    hero_video: str | None = None
    show_destinations: bool = True
    show_packages: bool = True
    show_testimonials: bool = True
    show_why_choose_us: bool = True


SETTINGS_MODELS: dict[SettingsKey, type[_SettingsGroup]] = {
    SettingsKey.GENERAL: GeneralSettings,
    SettingsKey.SOCIAL: SocialSettings,
    SettingsKey.HOMEPAGE: HomepageSettings,
}


class SiteSettingsResponse(BaseModel):
    """All settings groups; a group that was never saved is null."""

    general: dict[str, Any] | None = None
    social: dict[str, Any] | None = None
    homepage: dict[str, Any] | None = None


class SaveSettingsRequest(BaseModel):
    """Overwrite one settings group."""

    key: SettingsKey = Field(..., description="Settings group")
    value: dict[str, Any] = Field(..., description="Complete group value (camelCase keys)")
