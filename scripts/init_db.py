from __future__ import annotations

import sys
from pathlib import Path

import importlib

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.hr_operations.hr_operations.container import build_container
from src.hr_operations.hr_operations.database.bootstrap import ensure_indexes, list_collections, seed_departments


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    mongo_config = dict(settings.MONGO_CONFIG)

    container = build_container(mongo_config=mongo_config)
    ensure_indexes(container.conn)
    created = seed_departments(container.department_service)
    collections = list_collections(container.conn)
    print(
        "OK: Indexes ready -> "
        f"{mongo_config.get('uri')}/{mongo_config.get('database')} "
        f"(collections={len(collections)}, new departments={created})"
    )


if __name__ == "__main__":
    main()
