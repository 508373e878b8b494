"""Print a development token for an employee.

Usage: python scripts/issue_token.py <email>

Note: Production tokens come from the login service; this is for local testing
against the API only.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.hr_operations.hr_operations.auth.tokens import issue_token
from src.hr_operations.hr_operations.container import build_container


def main() -> None:
    if len(sys.argv) != 2:
        raise SystemExit("Usage: python scripts/issue_token.py <email>")

    settings = importlib.import_module(get_settings_module())
    container = build_container(mongo_config=dict(settings.MONGO_CONFIG))

    employee = container.employees_repo.find_by_email(sys.argv[1])
    if employee is None:
        raise SystemExit(f"No employee with email {sys.argv[1]!r}")

    print(
        issue_token(
            secret=settings.JWT_SECRET,
            employee_id=employee.id,
            role=employee.role,
            name=employee.name,
            email=employee.email,
            emp_code=employee.emp_code,
        )
    )


if __name__ == "__main__":
    main()
