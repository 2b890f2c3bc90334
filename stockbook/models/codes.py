from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import BigInteger, CheckConstraint, Integer, Numeric
from sqlalchemy.types import TypeDecorator

# Coded columns hold small integers (an application IntEnum's ordinal). The
# range guard rejects garbage; it is not a whitelist of defined variants.
CODE_MIN = 0
CODE_MAX = 99

# BIGSERIAL on PostgreSQL; SQLite only autoincrements INTEGER PRIMARY KEY.
BigIntPK = BigInteger().with_variant(Integer(), "sqlite")


def code_range(column: str, name: str) -> CheckConstraint:
    return CheckConstraint(f"{column} >= {CODE_MIN} AND {column} <= {CODE_MAX}", name=name)


def positive_if_present(*columns: str, name: str) -> CheckConstraint:
    clauses = " AND ".join(f"({column} IS NULL OR {column} > 0)" for column in columns)
    return CheckConstraint(clauses, name=name)


@dataclass(frozen=True)
class Reference:
    """What an inventory movement points at.

    ``kind`` is the coded entity type (e.g. a sale) and ``id`` the row in that
    entity's table, or ``None`` for movements with nothing to point at. There
    is no foreign key behind it since the target table depends on ``kind``.
    """

    kind: int
    id: int | None = None


class Amount(TypeDecorator):
    """NUMERIC(10, 2) rounded to cents before binding.

    PostgreSQL rounds to the column scale before evaluating checks; SQLite
    stores full precision. Checks must see the value that is read back.
    """

    impl = Numeric(10, 2)
    cache_ok = True

    _quantum = Decimal("0.01")

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if not isinstance(value, Decimal):
            value = Decimal(str(value))
        return value.quantize(self._quantum, rounding=ROUND_HALF_UP)
