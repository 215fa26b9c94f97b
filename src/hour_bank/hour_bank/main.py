from __future__ import annotations

import atexit
import importlib
import logging

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import build_container
from .employees.controller import register as register_employees
from .ledger.controller import register as register_ledger
from .records.controller import register as register_records
from .settings.controller import register as register_settings
from .sync.controller import register as register_sync
from .sync.scheduler import SyncScheduler
from .transactions.controller import register as register_transactions

logger = logging.getLogger(__name__)


def create_app() -> Flask:
    load_dotenv(override=False)
    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    storage_backend = getattr(settings, "STORAGE_BACKEND", "memory")
    db_config = getattr(settings, "DB_CONFIG", {})
    logger.info("settings=%s storage=%s", settings_module, storage_backend)

    container = build_container(
        storage_backend=storage_backend,
        db_config=db_config,
        auto_init_db=bool(getattr(settings, "AUTO_INIT_DB", False)),
        script_url=getattr(settings, "SCRIPT_URL", ""),
        remote_timeout=float(getattr(settings, "REMOTE_TIMEOUT_SECONDS", 10)),
        sync_lock_seconds=float(getattr(settings, "SYNC_LOCK_SECONDS", 10)),
    )
    app.extensions["hour_bank"] = container

    register_employees(app, container)
    register_records(app, container)
    register_ledger(app, container)
    register_transactions(app, container)
    register_settings(app, container)
    register_sync(app, container)

    if bool(getattr(settings, "AUTO_SYNC", False)):
        scheduler = SyncScheduler(
            container.sync_service,
            interval_seconds=float(getattr(settings, "SYNC_INTERVAL_SECONDS", 60)),
        )
        scheduler.start()
        atexit.register(scheduler.stop)

    return app
