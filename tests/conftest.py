import sqlite3

import pytest

from dbapiext.connection import Connection

NAMES = [
    "Anna", "Betty", "Charlotte", "Donna", "Elisabeth", "Francesca", "Gabriella",
    "Hannah", "Isabel", "Jacqueline", "Kimberley", "Laila", "Madeleine", "Nancy",
]


@pytest.fixture(scope="function")
def db():
    """Connection to a fresh in-memory SQLite database."""
    connection = Connection(sqlite3.connect(":memory:"))
    yield connection
    connection.close()


@pytest.fixture(scope="function")
def users_db(db):
    """Database with a `users` table holding 14 names, ids 1 to 14."""
    db.execute("CREATE TABLE users (id INTEGER PRIMARY KEY AUTOINCREMENT, name VARCHAR(255))")
    for name in NAMES:
        db.execute("INSERT INTO users (name) VALUES (:name)", {"name": name})
    return db


@pytest.fixture(scope="function")
def music_db(db):
    """Database with `artists` and `tracks`, tracks referencing artists."""
    db.execute("CREATE TABLE artists (id INTEGER PRIMARY KEY, name TEXT)")
    db.execute(
        "CREATE TABLE tracks ("
        " id INTEGER PRIMARY KEY,"
        " name TEXT,"
        " artist_id INTEGER,"
        " FOREIGN KEY(artist_id) REFERENCES artists(id))"
    )
    db.execute("INSERT INTO artists VALUES (1, 'Bob Dylan')")
    db.execute("INSERT INTO tracks VALUES (1, 'Blowing in the wind', 1)")
    db.execute("INSERT INTO tracks VALUES (2, 'House of the rising sun', 1)")
    db.execute("INSERT INTO tracks VALUES (3, 'Unknown', NULL)")
    return db
