# type: ignore
# /// script
# dependencies = [
#   "sqlbind[aiosqlite]",
#   "rich",
# ]
# requires-python = ">=3.10"
# ///
"""Example demonstrating named placeholders with PreparedQuery and PreparedQueryAs.

Inserts, queries, updates and deletes rows in an in-memory SQLite database,
binding every value through a ``(query, name) -> query`` binder. Each dispatch
is logged to stderr as ``key=value`` text via ``configure_logging``.
"""

import asyncio
from dataclasses import dataclass

import aiosqlite
from rich import print

from sqlbind import PreparedQuery, PreparedQueryAs
from sqlbind.adapters.aiosqlite import AiosqliteDriver
from sqlbind.utils.logging import configure_logging

__all__ = ("User", "basic_example", "main")


@dataclass
class User:
    id: int
    name: str
    email: str


async def basic_example() -> None:
    """Run the insert/select/update/delete walkthrough."""
    async with aiosqlite.connect(":memory:") as connection:
        driver = AiosqliteDriver(connection)
        await connection.execute("""
            CREATE TABLE users (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                email TEXT NOT NULL UNIQUE
            )
        """)

        print("[bold]--- Inserting users ---[/bold]")
        people = [("Alice", "alice@example.com"), ("Bob", "bob@example.com"), ("Charlie", "charlie@example.com")]
        for name, email in people:
            insert = PreparedQuery(
                "INSERT INTO users (name, email) VALUES (:name, :email) "
                "ON CONFLICT (email) DO UPDATE SET name = excluded.name",
                lambda q, key, name=name, email=email: q.bind({":name": name, ":email": email}[key]),
            )
            result = await insert.execute(driver)
            print(f"[green]Inserted user {name!r}:[/green] last_insert_id={result.last_insert_id}")

        print("[bold]--- Fetching all users ---[/bold]")
        all_users = PreparedQueryAs("SELECT id, name, email FROM users ORDER BY id", lambda q, key: q, schema_type=User)
        users = await all_users.fetch_all(driver)
        print(f"[cyan]Found {len(users)} users:[/cyan]")
        for user in users:
            print(f"  - {user.name} (id={user.id}, email={user.email})")

        print("[bold]--- Finding user by email ---[/bold]")
        search_email = "alice@example.com"
        by_email = PreparedQueryAs(
            "SELECT id, name, email FROM users WHERE email = :email",
            lambda q, key: q.bind(search_email) if key == ":email" else q,
            schema_type=User,
        )
        user = await by_email.fetch_optional(driver)
        if user is None:
            print(f"[yellow]User with email {search_email!r} not found[/yellow]")
        else:
            print(f"[cyan]Found user:[/cyan] {user.name} ({user.email})")

        print("[bold]--- Updating user ---[/bold]")
        update_email, new_name = "bob@example.com", "Robert"

        def update_binder(q, key):
            if key == ":name":
                return q.bind(new_name)
            if key == ":email":
                return q.bind(update_email)
            return q

        result = await PreparedQuery("UPDATE users SET name = :name WHERE email = :email", update_binder).execute(
            driver
        )
        print(f"[yellow]Updated {result.rows_affected} row(s)[/yellow]")

        print("[bold]--- Deleting user ---[/bold]")
        delete = PreparedQuery("DELETE FROM users WHERE email = :email", lambda q, key: q.bind("charlie@example.com"))
        result = await delete.execute(driver)
        print(f"[yellow]Deleted {result.rows_affected} row(s)[/yellow]")

        users = await all_users.fetch_all(driver)
        print(f"[cyan]Remaining {len(users)} users:[/cyan] {users}")


def main() -> None:
    """Run the example."""
    print("[bold blue]sqlbind basic example[/bold blue]")
    configure_logging("DEBUG", structured=False)
    asyncio.run(basic_example())
    print("[green]✅ Example completed successfully![/green]")


if __name__ == "__main__":
    main()
