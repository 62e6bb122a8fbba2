from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

from sqlalchemy import Engine

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from qrdine.domain.common.ids import (
    MenuItemId,
    OrderId,
    RestaurantId,
    ReviewId,
    TableId,
    TableNumber,
    UserId,
)
from qrdine.domain.menu.entities import MenuItem, Nutrition
from qrdine.domain.restaurant.entities import RestaurantContact, RestaurantProfile
from qrdine.domain.review.entities import Review
from qrdine.domain.table.entities import DiningTable, QrCode, TableStatus
from qrdine.domain.user.entities import User, UserRole
from qrdine.infrastructure.db.repositories.menu_repo import SqlAlchemyMenuRepository
from qrdine.infrastructure.db.repositories.restaurant_repo import SqlAlchemyRestaurantRepository
from qrdine.infrastructure.db.repositories.review_repo import SqlAlchemyReviewRepository
from qrdine.infrastructure.db.repositories.table_repo import SqlAlchemyTableRepository
from qrdine.infrastructure.db.repositories.user_repo import SqlAlchemyUserRepository

NOW = datetime(2026, 10, 1, 12, 0, tzinfo=timezone.utc)


def _table(number: str, created_at: datetime = NOW) -> DiningTable:
    return DiningTable(
        table_id=TableId(f"tbl_{number:0>3}"),
        number=TableNumber(number),
        name=f"Meja {number}",
        capacity=4,
        location="Indoor",
        status=TableStatus.AVAILABLE,
        created_at=created_at,
        updated_at=created_at,
    )


def test_table_qr_document_round_trips(engine: Engine) -> None:
    repository = SqlAlchemyTableRepository(engine)
    repository.add(_table("7"))
    qr_code = QrCode(
        data_url="data:image/png;base64,AAAA",
        target_url="http://localhost:3000/tables/7",
        png_base64="AAAA",
        generated_at=NOW,
    )

    table = repository.get_by_number(TableNumber("7"))
    assert table is not None
    repository.update(table.with_qr_code(qr_code, NOW + timedelta(minutes=1)))

    stored = repository.get(TableId("tbl_007"))
    assert stored is not None
    assert stored.qr_code == qr_code

    repository.update(stored.without_qr_code(NOW + timedelta(minutes=2)))
    cleared = repository.get(TableId("tbl_007"))
    assert cleared is not None
    assert cleared.qr_code is None


def test_tables_list_in_creation_order_and_delete(engine: Engine) -> None:
    repository = SqlAlchemyTableRepository(engine)
    repository.add(_table("2", NOW + timedelta(minutes=1)))
    repository.add(_table("1"))

    assert [str(table.number) for table in repository.list_all()] == ["1", "2"]
    assert repository.delete(TableId("tbl_001")) is True
    assert repository.delete(TableId("tbl_001")) is False
    assert repository.get_by_number(TableNumber("1")) is None


def test_menu_items_keep_nutrition_and_sort_by_category(engine: Engine) -> None:
    repository = SqlAlchemyMenuRepository(engine)
    nutrition = Nutrition(calories=500, protein=27.0, carbs=65.0, fat=9.0, fiber=2.0, sugar=3.0)
    repository.add(
        MenuItem(
            item_id=MenuItemId("itm_004"),
            name="Es Teh Manis",
            description="Teh manis dingin",
            category="Minuman",
            price=5000,
            stock=0,
            created_at=NOW,
            updated_at=NOW,
        )
    )
    repository.add(
        MenuItem(
            item_id=MenuItemId("itm_001"),
            name="Nasi Goreng Ayam",
            description="Nasi goreng dengan ayam suwir",
            category="Makanan",
            price=25000,
            stock=10,
            created_at=NOW,
            updated_at=NOW,
            composition="Nasi 200g, Ayam 50g",
            nutrition=nutrition,
        )
    )

    items = repository.list_all()

    assert [str(item.item_id) for item in items] == ["itm_001", "itm_004"]
    assert items[0].nutrition == nutrition
    assert items[1].nutrition is None
    assert items[1].status.value == "sold_out"


def test_reviews_filter_and_collect_ratings(engine: Engine) -> None:
    repository = SqlAlchemyReviewRepository(engine)
    for index, (table_number, rating) in enumerate([("1", 5), ("1", 3), ("2", 4)]):
        repository.add(
            Review(
                review_id=ReviewId(f"rev_{index}"),
                order_id=OrderId(f"ORDER-{table_number}-{index}"),
                table_number=TableNumber(table_number),
                rating=rating,
                comment="",
                created_at=NOW + timedelta(minutes=index),
            )
        )

    table_one = repository.list_all(table_number=TableNumber("1"))

    assert [str(review.review_id) for review in table_one] == ["rev_1", "rev_0"]
    assert sorted(repository.ratings()) == [3, 4, 5]
    assert repository.delete(ReviewId("rev_2")) is True
    assert repository.get(ReviewId("rev_2")) is None


def test_user_lookups_are_case_insensitive_on_email(engine: Engine) -> None:
    repository = SqlAlchemyUserRepository(engine)
    repository.add(
        User(
            user_id=UserId("usr_1"),
            username="admin",
            email="admin@example.com",
            password_hash="$2b$04$hash",
            role=UserRole.ADMIN,
            created_at=NOW,
        )
    )

    found = repository.find_by_email("admin@example.com")

    assert found is not None
    assert found.role == UserRole.ADMIN
    assert repository.exists(email="ADMIN@example.com", username="someone")
    assert repository.exists(email="other@example.com", username="admin")
    assert not repository.exists(email="other@example.com", username="other")


def test_restaurant_contact_is_stored_as_document(engine: Engine) -> None:
    repository = SqlAlchemyRestaurantRepository(engine)
    profile = RestaurantProfile(
        restaurant_id=RestaurantId("rst_1"),
        name="Warung Makan Sederhana",
        address="Jl. Merdeka No. 10",
        contact=RestaurantContact(phone="0812", instagram="@warung"),
    )
    repository.add(profile)

    assert repository.get(RestaurantId("rst_1")) == profile
    assert repository.name_exists("WARUNG MAKAN SEDERHANA")
    assert [item.name for item in repository.list_all()] == ["Warung Makan Sederhana"]
