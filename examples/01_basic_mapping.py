"""
Example 01: Basic Mapping

This example demonstrates mapping SQLite query results onto a plain class
with no constructor arguments, including private fields and a column
label override.
"""

import sqlite3
from decimal import Decimal
from typing import Annotated, Optional

from row_reflect import Column, MapperRegistry


class Customer:
    """Plain class: no base class, no __init__"""
    __id: Optional[int]
    name: Optional[str]
    _email: Annotated[Optional[str], Column("contact_email")]
    credit: Optional[Decimal] = None

    def __repr__(self):
        return f"Customer(id={self.__id}, name={self.name!r}, email={self._email!r}, credit={self.credit})"


def main():
    conn = sqlite3.connect(":memory:")
    conn.execute("""
        CREATE TABLE customers (
            id INTEGER PRIMARY KEY,
            name TEXT NOT NULL,
            contact_email TEXT,
            credit TEXT
        )
    """)
    conn.execute("INSERT INTO customers VALUES (1, 'Alice', 'alice@example.com', '120.50')")
    conn.execute("INSERT INTO customers VALUES (2, 'Bob', NULL, NULL)")

    registry = MapperRegistry()
    mapper = registry.mapper_for(Customer)

    print("=== Basic Mapping ===\n")
    cursor = conn.execute("SELECT ID, NAME, contact_email, credit FROM customers ORDER BY id")
    for customer in mapper.map_cursor(cursor):
        print(f"   {customer}")
    print()

    print("Row dicts work too:")
    print(f"   {mapper.map_one({'id': 3, 'name': 'Carol'})}")

    conn.close()


if __name__ == "__main__":
    main()
