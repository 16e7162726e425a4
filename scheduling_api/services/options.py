"""Typed access to site options.

Options are stored as JSON text keyed by name. Callers go through the typed
accessors below instead of reading raw values.
"""

import json
import logging
from typing import Any

from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from scheduling_api.models.option import Option

logger = logging.getLogger(__name__)

HOME_SETTINGS_OPTION = 'custom_home_settings'


class HomeSettings(BaseModel):
    title: str | None = None
    description: str | None = None
    layout: int | None = None
    color: str | None = None
    show_featured: bool | None = None
    sections: list[Any] | None = None


def get_option(db: Session, name: str) -> str | None:
    option = db.get(Option, name)
    return option.value if option else None


def update_option(db: Session, name: str, value: str) -> None:
    option = db.get(Option, name)
    if option is None:
        db.add(Option(name=name, value=value))
    else:
        option.value = value
    db.commit()


def load_home_settings(db: Session) -> HomeSettings:
    raw_value = get_option(db, HOME_SETTINGS_OPTION)
    if not raw_value:
        return HomeSettings()

    try:
        return HomeSettings.model_validate(json.loads(raw_value))
    except (ValueError, ValidationError):
        logger.warning('Stored %s option is not valid; returning defaults.', HOME_SETTINGS_OPTION)
        return HomeSettings()


def save_home_settings(db: Session, settings: HomeSettings) -> HomeSettings:
    update_option(db, HOME_SETTINGS_OPTION, settings.model_dump_json())
    return settings
