from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.hr_operations.hr_operations.container import build_container
from src.hr_operations.hr_operations.database.bootstrap import ensure_demo_employees, seed_departments


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    mongo_config = dict(settings.MONGO_CONFIG)

    container = build_container(mongo_config=mongo_config)
    departments = seed_departments(container.department_service)
    employees = ensure_demo_employees(container.employee_service)

    print(
        "OK: Seeded database -> "
        f"{mongo_config.get('uri')}/{mongo_config.get('database')} "
        f"(departments={departments}, employees={employees})"
    )


if __name__ == "__main__":
    main()
