from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv

from config import get_settings_module

from .container import build_container
from .core.logging_utils import setup_json_logging
from .database.bootstrap import apply_schema, list_tables
from .rewards.batch import BatchSummary

logger = logging.getLogger("workers_management.main")


def run_reward_batch() -> BatchSummary:
    """Entry point for the external (e.g. weekly) scheduler: one pass over all workers."""
    load_dotenv(override=False)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    setup_json_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    db_config = getattr(settings, "DB_CONFIG")
    logger.info(
        "settings_loaded",
        extra={
            "settings": settings_module,
            "db": f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}",
        },
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        schema_path = Path(__file__).resolve().parents[2] / "database" / "schema.sql"
        apply_schema(db_config, schema_path=schema_path)
        logger.info("schema_ready", extra={"tables": len(list_tables(db_config))})

    container = build_container(
        db_config=db_config,
        smtp_config=getattr(settings, "SMTP_CONFIG", None),
        team_codes=getattr(settings, "TEAM_CODES", None),
        worker_timeout_seconds=getattr(settings, "REWARD_WORKER_TIMEOUT_SECONDS", None),
    )
    return container.reward_batch_runner.run_all()


if __name__ == "__main__":
    run_reward_batch()
