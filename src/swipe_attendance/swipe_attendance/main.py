from __future__ import annotations

import logging
from types import ModuleType
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module, load_settings

from .attendance.controller import register as register_attendance
from .container import build_container

logger = logging.getLogger(__name__)


def create_app(settings: Optional[ModuleType] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings = settings or load_settings()
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=logging.DEBUG if app.config["DEBUG"] else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    container = build_container(settings=settings)
    logger.info(
        "swipe-attendance settings=%s policy=%s shifts=%s",
        getattr(settings, "__name__", get_settings_module()),
        container.run_config.policy.value,
        ",".join(t.code for t in container.templates_repo.list_all()),
    )

    register_attendance(app, container)

    return app
