from __future__ import annotations

import os

from sqlalchemy import inspect
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.orm import Session

from qrdine.domain.menu.nutrition import estimate_nutrition_from_keywords
from qrdine.infrastructure.auth.passwords import BcryptPasswordHasher
from qrdine.infrastructure.db.models.menu import MenuItemModel
from qrdine.infrastructure.db.models.table import DiningTableModel
from qrdine.infrastructure.db.models.user import UserModel
from qrdine.infrastructure.db.session import get_engine

MENU_ITEMS = [
    {
        "id": "itm_001",
        "name": "Nasi Goreng Spesial",
        "description": "Nasi goreng dengan telur, ayam suwir dan kerupuk",
        "composition": "Nasi 200g, Telur 1 butir, Ayam 50g, Kecap manis 1 sdm, Minyak 1 sdm",
        "category": "makanan",
        "price": 25000,
        "stock": 30,
    },
    {
        "id": "itm_002",
        "name": "Mie Goreng Udang",
        "description": "Mie goreng dengan udang dan sayuran",
        "composition": "Mie 150g, Udang 30g, Sayur 50g, Minyak 1 sdm",
        "category": "makanan",
        "price": 28000,
        "stock": 20,
    },
    {
        "id": "itm_003",
        "name": "Es Teh Manis",
        "description": "Teh melati dingin",
        "composition": None,
        "category": "minuman",
        "price": 8000,
        "stock": 50,
    },
    {
        "id": "itm_004",
        "name": "Pisang Goreng",
        "description": "Pisang kepok goreng tepung",
        "composition": "Pisang 2 buah, Tepung 30g, Minyak 1 sdm",
        "category": "camilan",
        "price": 12000,
        "stock": 0,
    },
]

TABLES = [
    {"number": "1", "name": "Meja 1", "capacity": 2, "location": "Indoor"},
    {"number": "2", "name": "Meja 2", "capacity": 4, "location": "Indoor"},
    {"number": "3", "name": "Meja 3", "capacity": 4, "location": "Outdoor"},
    {"number": "4", "name": "Meja 4", "capacity": 6, "location": "Outdoor"},
]


def _seed_menu(session: Session) -> None:
    for item in MENU_ITEMS:
        composition = item["composition"]
        nutrition = (
            estimate_nutrition_from_keywords(str(composition)).to_dict() if composition else None
        )
        values = {**item, "nutrition": nutrition}
        session.execute(
            insert(MenuItemModel)
            .values(**values)
            .on_conflict_do_update(
                index_elements=[MenuItemModel.id],
                set_={key: value for key, value in values.items() if key != "id"},
            )
        )


def _seed_tables(session: Session) -> None:
    for table in TABLES:
        session.execute(
            insert(DiningTableModel)
            .values(id=f"tbl_{table['number']:0>3}", status="available", **table)
            .on_conflict_do_nothing(index_elements=[DiningTableModel.number])
        )


def _seed_admin(session: Session) -> bool:
    email = os.getenv("SEED_ADMIN_EMAIL", "admin@example.com").lower()
    password = os.getenv("SEED_ADMIN_PASSWORD")
    if not password:
        return False
    session.execute(
        insert(UserModel)
        .values(
            id="usr_admin",
            username="admin",
            email=email,
            password_hash=BcryptPasswordHasher().hash(password),
            role="admin",
        )
        .on_conflict_do_nothing(index_elements=[UserModel.id])
    )
    return True


def main() -> None:
    engine = get_engine(timeout_seconds=2.0)
    inspector = inspect(engine)
    required_tables = {"menu_items", "dining_tables", "users"}
    if not required_tables.issubset(set(inspector.get_table_names(schema="public"))):
        print("no schema yet")
        return

    with Session(engine) as session:
        _seed_menu(session)
        _seed_tables(session)
        admin_seeded = _seed_admin(session)
        session.commit()

    if not admin_seeded:
        print("SEED_ADMIN_PASSWORD not set, admin user skipped")
    print("seed complete")


if __name__ == "__main__":
    main()
