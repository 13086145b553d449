# type: ignore
# /// script
# dependencies = [
#   "sqlbind[aiosqlite]",
#   "rich",
# ]
# requires-python = ">=3.10"
# ///
"""Example demonstrating prepared statements inside caller-managed transactions.

Money is moved between accounts; a transfer that would overdraw the source
account is rolled back together with everything else in its transaction.
Dispatch records are written to stderr as JSON lines.
"""

import asyncio
from dataclasses import dataclass

import aiosqlite
from rich import print

from sqlbind import PreparedQuery, PreparedQueryAs
from sqlbind.adapters.aiosqlite import AiosqliteDriver
from sqlbind.utils.logging import configure_logging

__all__ = ("Account", "main", "transaction_example", "transfer_money")


@dataclass
class Account:
    id: int
    name: str
    balance: int


class TransferError(Exception):
    """A transfer could not be completed."""


async def transfer_money(driver: AiosqliteDriver, from_id: int, to_id: int, amount: int) -> None:
    """Debit ``from_id`` and credit ``to_id`` on the driver's open transaction."""
    print(f"  Transferring ${amount} from account {from_id} to account {to_id}")

    debit = PreparedQuery(
        "UPDATE accounts SET balance = balance - :amount WHERE id = :id",
        lambda q, key: q.bind(amount if key == ":amount" else from_id),
    )
    if (await debit.execute(driver)).rows_affected == 0:
        msg = "Source account not found"
        raise TransferError(msg)

    check_balance = PreparedQueryAs(
        "SELECT balance FROM accounts WHERE id = :id", lambda q, key: q.bind(from_id), schema_type=tuple
    )
    (balance,) = await check_balance.fetch_one(driver)
    if balance < 0:
        msg = f"Insufficient funds (balance: ${balance})"
        raise TransferError(msg)

    credit = PreparedQuery(
        "UPDATE accounts SET balance = balance + :amount WHERE id = :id",
        lambda q, key: q.bind(amount if key == ":amount" else to_id),
    )
    if (await credit.execute(driver)).rows_affected == 0:
        msg = "Destination account not found"
        raise TransferError(msg)

    print("  [green]✓ Transfer completed[/green]")


async def show_accounts(driver: AiosqliteDriver) -> None:
    query = PreparedQueryAs("SELECT id, name, balance FROM accounts ORDER BY id", lambda q, key: q, schema_type=Account)
    print("[cyan]Current account balances:[/cyan]")
    for account in await query.fetch_all(driver):
        print(f"  {account.name} (id={account.id}): ${account.balance}")


async def run_transfers(connection: aiosqlite.Connection, transfers: "list[tuple[int, int, int]]") -> None:
    """Run every transfer in one transaction, rolling all of them back on failure."""
    driver = AiosqliteDriver(connection)
    try:
        for from_id, to_id, amount in transfers:
            await transfer_money(driver, from_id, to_id, amount)
    except TransferError as e:
        await connection.rollback()
        print(f"  [red]✗ Transaction rolled back: {e}[/red]")
    else:
        await connection.commit()
        print("  [green]✓ Transaction committed[/green]")
    await show_accounts(driver)


async def transaction_example() -> None:
    async with aiosqlite.connect(":memory:") as connection:
        driver = AiosqliteDriver(connection)
        await connection.execute(
            "CREATE TABLE accounts (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT NOT NULL, balance INTEGER NOT NULL)"
        )
        for name, balance in [("Alice", 1000), ("Bob", 500), ("Charlie", 750)]:
            insert = PreparedQuery(
                "INSERT INTO accounts (name, balance) VALUES (:name, :balance)",
                lambda q, key, name=name, balance=balance: q.bind(name if key == ":name" else balance),
            )
            await insert.execute(driver)
        await connection.commit()
        await show_accounts(driver)

        print("[bold]--- Successful transfer ---[/bold]")
        await run_transfers(connection, [(1, 2, 200)])

        print("[bold]--- Failed transfer (insufficient funds) ---[/bold]")
        await run_transfers(connection, [(2, 1, 1000)])

        print("[bold]--- Multiple transfers in one transaction ---[/bold]")
        await run_transfers(connection, [(1, 3, 100), (3, 2, 50)])


def main() -> None:
    """Run the example."""
    print("[bold blue]sqlbind transaction example[/bold blue]")
    configure_logging("DEBUG")
    asyncio.run(transaction_example())
    print("[green]✅ Example completed successfully![/green]")


if __name__ == "__main__":
    main()
