from decimal import Decimal

from sqlalchemy import Numeric, String
from sqlalchemy.types import TypeDecorator


class ExactDecimal(TypeDecorator):
    """
    Decimal column that round-trips exactly on every backend.

    PostgreSQL gets a real NUMERIC. SQLite has no decimal storage and would
    coerce NUMERIC to a float, so there the value is kept as its string form.
    Ordering by this column in SQL is only numeric on PostgreSQL; sort in
    Python when the backend may be SQLite.
    """

    impl = String
    cache_ok = True

    def __init__(self, precision: int = 36, scale: int = 18):
        super().__init__()
        self.precision = precision
        self.scale = scale

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            return dialect.type_descriptor(Numeric(self.precision, self.scale))
        return dialect.type_descriptor(String(self.precision + 2))

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        value = Decimal(str(value))
        if dialect.name == "postgresql":
            return value
        return str(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(str(value))
