import pytest
from sqlmodel import select

from bakery.database import Database, _with_sslmode
from bakery.models.branch import Branch


def test_transaction_commits_on_success(db):
    with db.session() as session:
        with Database.transaction(session):
            session.add(
                Branch(name="District 5", address="5 Tran Hung Dao", phone="0285555555")
            )

    with db.session() as session:
        assert [b.name for b in session.exec(select(Branch)).all()] == ["District 5"]


def test_transaction_rolls_back_on_error(db):
    with db.session() as session:
        with pytest.raises(RuntimeError):
            with Database.transaction(session):
                session.add(
                    Branch(name="District 7", address="7 Nguyen Thi Thap", phone="0287777777")
                )
                session.flush()
                raise RuntimeError("boom")

    with db.session() as session:
        assert session.exec(select(Branch)).all() == []


def test_ping(db):
    assert db.ping() is True


@pytest.mark.parametrize(
    "url, expected",
    [
        ("sqlite:///./bakery.db", "sqlite:///./bakery.db"),
        ("postgresql://u:p@h/db", "postgresql://u:p@h/db?sslmode=require"),
        ("postgresql://u:p@h/db?x=1", "postgresql://u:p@h/db?x=1&sslmode=require"),
        ("postgresql://u:p@h/db?sslmode=disable", "postgresql://u:p@h/db?sslmode=disable"),
    ],
)
def test_postgres_urls_require_ssl(url, expected):
    assert _with_sslmode(url) == expected
