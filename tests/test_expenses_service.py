"""Tests for app.services.expenses against an in-memory SQLite database."""

import unittest
from datetime import date
from unittest.mock import MagicMock

from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.exceptions import StoreError, ValidationError
from app.models import Base, User
from app.schemas.expense import ExpenseCreate
from app.services.expenses import create_expense, filter_expenses, list_expenses


def _expense(
    amount: float = 10.0,
    category: str = "food",
    day: date = date(2024, 1, 5),
    description: str | None = None,
) -> ExpenseCreate:
    """Build an ExpenseCreate for tests."""
    return ExpenseCreate(amount=amount, category=category, date=day, description=description)


class ExpenseStoreTestCase(unittest.TestCase):
    """Fresh in-memory database with two users per test."""

    def setUp(self) -> None:
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(bind=self.engine)
        self.db = sessionmaker(bind=self.engine, autoflush=False)()
        self.alice = User(username="alice", email="alice@x.com", password_hash="x")
        self.bob = User(username="bob", email="bob@x.com", password_hash="x")
        self.db.add_all([self.alice, self.bob])
        self.db.commit()

    def tearDown(self) -> None:
        self.db.close()
        Base.metadata.drop_all(bind=self.engine)
        self.engine.dispose()

    def _seed_alice(self) -> None:
        create_expense(self.db, self.alice.id, _expense(12.5, "food", date(2024, 1, 5)))
        create_expense(self.db, self.alice.id, _expense(3.0, "transport", date(2024, 1, 20)))
        create_expense(self.db, self.alice.id, _expense(40.0, "food", date(2024, 2, 1)))
        create_expense(self.db, self.alice.id, _expense(8.0, "fun", date(2023, 12, 31)))


class TestCreateExpense(ExpenseStoreTestCase):
    def test_owner_comes_from_caller(self) -> None:
        expense = create_expense(self.db, self.alice.id, _expense(description="lunch"))
        self.assertIsNotNone(expense.id)
        self.assertEqual(expense.user_id, self.alice.id)
        self.assertEqual(expense.amount, 10.0)
        self.assertEqual(expense.description, "lunch")
        self.assertEqual(expense.date, date(2024, 1, 5))

    def test_blank_category_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            create_expense(self.db, self.alice.id, _expense(category="   "))

    def test_not_idempotent(self) -> None:
        create_expense(self.db, self.alice.id, _expense())
        create_expense(self.db, self.alice.id, _expense())
        self.assertEqual(len(list_expenses(self.db, self.alice.id)), 2)

    def test_category_kept_as_submitted(self) -> None:
        expense = create_expense(self.db, self.alice.id, _expense(category=" food "))
        self.assertEqual(expense.category, " food ")
        result = filter_expenses(self.db, self.alice.id, category=" food ")
        self.assertEqual([e.id for e in result], [expense.id])


class TestListExpenses(ExpenseStoreTestCase):
    def test_sorted_by_date_descending(self) -> None:
        self._seed_alice()
        dates = [e.date for e in list_expenses(self.db, self.alice.id)]
        self.assertEqual(dates, sorted(dates, reverse=True))
        self.assertEqual(len(dates), 4)

    def test_scoped_to_owner(self) -> None:
        self._seed_alice()
        mine = create_expense(self.db, self.bob.id, _expense(1.0, "food"))
        self.assertEqual([e.id for e in list_expenses(self.db, self.bob.id)], [mine.id])
        self.assertNotIn(mine.id, [e.id for e in list_expenses(self.db, self.alice.id)])

    def test_empty(self) -> None:
        self.assertEqual(list_expenses(self.db, self.bob.id), [])


class TestFilterExpenses(ExpenseStoreTestCase):
    def setUp(self) -> None:
        super().setUp()
        self._seed_alice()

    def test_category_exact_match(self) -> None:
        result = filter_expenses(self.db, self.alice.id, category="food")
        self.assertEqual([e.category for e in result], ["food", "food"])
        self.assertEqual(filter_expenses(self.db, self.alice.id, category="Food"), [])

    def test_date_range_inclusive(self) -> None:
        result = filter_expenses(
            self.db,
            self.alice.id,
            start_date=date(2024, 1, 5),
            end_date=date(2024, 1, 20),
        )
        self.assertEqual([e.date for e in result], [date(2024, 1, 20), date(2024, 1, 5)])

    def test_category_and_range(self) -> None:
        result = filter_expenses(
            self.db,
            self.alice.id,
            category="food",
            start_date=date(2024, 1, 1),
            end_date=date(2024, 1, 31),
        )
        self.assertEqual([e.amount for e in result], [12.5])

    def test_single_bound_is_ignored(self) -> None:
        everything = [e.id for e in list_expenses(self.db, self.alice.id)]
        only_start = filter_expenses(self.db, self.alice.id, start_date=date(2024, 2, 1))
        only_end = filter_expenses(self.db, self.alice.id, end_date=date(2023, 1, 1))
        self.assertEqual([e.id for e in only_start], everything)
        self.assertEqual([e.id for e in only_end], everything)

    def test_other_owner_sees_nothing(self) -> None:
        self.assertEqual(filter_expenses(self.db, self.bob.id, category="food"), [])


class TestStoreFailures(unittest.TestCase):
    """SQLAlchemy errors surface as StoreError."""

    def test_create_rolls_back(self) -> None:
        session = MagicMock()
        session.commit.side_effect = OperationalError("INSERT", {}, Exception("down"))
        with self.assertRaises(StoreError):
            create_expense(session, 1, _expense())
        session.rollback.assert_called_once()

    def test_list_failure(self) -> None:
        session = MagicMock()
        session.query.return_value.filter.return_value.order_by.return_value.all.side_effect = (
            OperationalError("SELECT", {}, Exception("down"))
        )
        with self.assertRaises(StoreError):
            list_expenses(session, 1)


if __name__ == "__main__":
    unittest.main()
