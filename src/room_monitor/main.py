from __future__ import annotations

import importlib
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.datetime_utils import Clock
from .common.logging import get_logger, setup_logging
from .container import build_container
from .core.settings import EngineSettings
from .reports.controller import register as register_reports
from .schedules.controller import register as register_schedules

logger = get_logger(__name__)


def create_app(*, clock: Optional[Clock] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    setup_logging(
        json_output=bool(getattr(settings, "LOG_JSON", False)),
        log_level=str(getattr(settings, "LOG_LEVEL", "INFO")),
    )

    engine_settings = EngineSettings.from_module(settings)
    container = build_container(settings=engine_settings, clock=clock)
    app.extensions["room_monitor"] = container

    logger.info(
        "app_configured",
        settings=settings_module,
        timezone=engine_settings.timezone,
        midnight_policy=engine_settings.midnight_policy.value,
        revalidate_updates=engine_settings.revalidate_updates,
    )

    register_schedules(app, container)
    register_attendance(app, container)
    register_reports(app, container)

    return app
