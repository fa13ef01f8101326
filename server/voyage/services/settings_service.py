"""Site settings service."""

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import ValidationError
from ..models.site_setting import SiteSetting
from ..schemas.settings import SETTINGS_MODELS, SettingsKey, SiteSettingsResponse

logger = logging.getLogger(__name__)


class SettingsService:
    """Reads and overwrites the site settings groups."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_all(self) -> SiteSettingsResponse:
        """Return every group; groups that were never saved are ``None``."""
        result = await self.db.execute(select(SiteSetting))
        stored = {row.key: row.value for row in result.scalars().all()}
        return SiteSettingsResponse(**{key.value: stored.get(key.value) for key in SettingsKey})

    async def save(self, key: SettingsKey, value: dict[str, Any]) -> dict[str, Any]:
        """
        Overwrite one settings group (insert or update, last write wins).

        The value is validated against the group's fields and stored with
        camelCase keys.

        Raises:
            ValidationError: If the value does not fit the group
        """
        model = SETTINGS_MODELS[key]
        try:
            normalized = model.model_validate(value).model_dump(by_alias=True)
        except PydanticValidationError as e:
            raise ValidationError(
                detail=f"Invalid '{key.value}' settings",
                violations=[
                    {"path": ".".join(str(part) for part in error["loc"]), "message": error["msg"]}
                    for error in e.errors()
                ]
            )

        setting = await self.db.get(SiteSetting, key.value)
        if setting is None:
            setting = SiteSetting(key=key.value, value=normalized)
            self.db.add(setting)
        else:
            setting.value = normalized

        await self.db.commit()

        logger.info("Site settings saved", extra={"key": key.value})
        return normalized
