from __future__ import annotations

import importlib
from pathlib import Path

from config import get_settings_module

from office_presence.core.logging_setup import configure_logging
from office_presence.database.bootstrap import DEMO_USERS, apply_seed_sql, ensure_demo_users


def main() -> None:
    configure_logging()
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    seed_path = Path(__file__).resolve().parents[1] / "database" / "seed.sql"
    apply_seed_sql(db_config, seed_path=seed_path)
    ensure_demo_users(db_config)

    print(f"OK: Seeded holidays and demo users ({', '.join(email for _, email, _, _ in DEMO_USERS)})")


if __name__ == "__main__":
    main()
