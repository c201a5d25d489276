# athan/services/settings_service.py
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from marshmallow import ValidationError

from ..errors import ConfigurationError
from ..schemas import SettingsSchema
from .helpers.constants import DEFAULT_IMSAK_MINUTES, DEFAULT_METHOD_KEY, LOCATION_PRESETS
from .prayer_time.types import EngineConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    location: str = "berlin"
    berlin_use_api: bool = False
    custom_city: str = ""
    custom_country: str = ""
    dst_offset: int = 0
    hijri_offset: int = 0
    method: str = DEFAULT_METHOD_KEY
    imsak_minutes: int = DEFAULT_IMSAK_MINUTES
    auto_ramadan: bool = True
    ramadan_mode: bool = False
    show_iftar_countdown: bool = True
    adjustments: Dict[str, int] = field(default_factory=dict)
    prayers: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    @property
    def engine_config(self) -> EngineConfig:
        return EngineConfig(dst_offset=self.dst_offset, adjustments=dict(self.adjustments))

    @property
    def remote_location(self) -> Optional[Tuple[str, str]]:
        """
        (city, country) to query remotely, or None when times are calculated locally.
        A custom location without a city has nothing to query.
        """
        if self.location == "berlin":
            if not self.berlin_use_api:
                return None
            preset = LOCATION_PRESETS["berlin"]
            return preset["city"], preset["country"]
        if self.location == "custom":
            city = self.custom_city.strip()
            if not city:
                return None
            return city, self.custom_country.strip()
        preset = LOCATION_PRESETS[self.location]
        return preset["city"], preset["country"]


def load_settings(raw=None) -> Settings:
    """
    Loads stored settings, repairing whatever is missing or invalid with defaults.
    Never raises: invalid fields are logged and replaced.
    """
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except ValueError as e:
            logger.warning("%s", ConfigurationError(f"Stored settings are not valid JSON, using defaults: {e}"))
            raw = {}
    if not isinstance(raw, dict):
        if raw is not None:
            logger.warning("%s", ConfigurationError(f"Stored settings have unexpected type {type(raw).__name__}, using defaults"))
        raw = {}

    schema = SettingsSchema()
    try:
        data = schema.load(raw)
    except ValidationError as err:
        invalid_fields = sorted(err.messages)
        logger.warning("%s", ConfigurationError(f"Repairing invalid settings fields with defaults: {invalid_fields}"))
        data = schema.load({k: v for k, v in raw.items() if k not in err.messages})

    return Settings(**data)
