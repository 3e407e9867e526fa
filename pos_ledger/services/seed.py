"""
Reference data inserted into a fresh database.
"""
from typing import Any, Callable, Iterable, List, Mapping

from sqlalchemy import func, insert, select
from sqlalchemy.engine import Connection

from pos_ledger.models.cashier import Cashier


SeedProvider = Callable[[], Iterable[Mapping[str, Any]]]


DEFAULT_CASHIERS = (
    # (code, name, role, last_active, require_pin, pin)
    ("linh", "Linh", "Trưởng ca", "08:05", True, "1234"),
    ("hoang", "Hoàng", "Thu ngân", "08:10", False, None),
    ("an", "An", "Thu ngân", "Đang nghỉ", True, "5678"),
    ("vi", "Vi", "Thu ngân", "Hôm qua", False, None),
)


def default_cashier_seed() -> List[dict]:
    return [
        {
            "code": code,
            "name": name,
            "role": role,
            "last_active": last_active,
            "require_pin": require_pin,
            "pin": pin,
            "display_order": index + 1,
        }
        for index, (code, name, role, last_active, require_pin, pin) in enumerate(DEFAULT_CASHIERS)
    ]


def seed_cashiers_if_empty(connection: Connection, seed_provider: SeedProvider = default_cashier_seed) -> int:
    """
    Insert the provider's cashiers, but only into an empty table.

    Returns the number of rows inserted (0 once any cashier exists).
    """
    count = connection.execute(select(func.count()).select_from(Cashier.__table__)).scalar_one()
    if count > 0:
        return 0
    rows = [dict(row) for row in seed_provider()]
    if not rows:
        return 0
    connection.execute(insert(Cashier.__table__), rows)
    return len(rows)
