"""
Example 02: Field Mapper Overrides

This example demonstrates registering an override for one value type and
routing excluded types to a different strategy.
"""

import sqlite3
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from row_reflect import FieldMapper, MapperRegistry


class RoundedDecimalMapper(FieldMapper):
    """Reads decimals rounded to two places"""
    value_type = Decimal
    check_null = True

    def extract(self, cursor, index, field, context):
        value = cursor.get_decimal(index)
        if value is None:
            return None
        return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


@dataclass
class Invoice:
    invoice_id: int = 0
    amount: Optional[Decimal] = None


def main():
    conn = sqlite3.connect(":memory:")
    conn.execute("CREATE TABLE invoices (invoice_id INTEGER, amount TEXT)")
    conn.executemany(
        "INSERT INTO invoices VALUES (?, ?)",
        [(1, "19.999"), (2, "5.5"), (3, None)],
    )

    registry = MapperRegistry(dict)
    registry.register(RoundedDecimalMapper())

    print("=== Overrides ===\n")
    cursor = conn.execute("SELECT invoice_id, amount FROM invoices")
    for invoice in registry.mapper_for(Invoice).map_cursor(cursor):
        print(f"   {invoice}")
    print()

    print("=== Excluded types ===\n")
    print(f"   accepts(Invoice) = {registry.accepts(Invoice)}")
    print(f"   accepts(dict)    = {registry.accepts(dict)}")

    conn.close()


if __name__ == "__main__":
    main()
