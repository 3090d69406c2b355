"""Greeting model.

A single meaningful row: readers take whichever greeting sorts first.
The table is dropped and recreated by the reset endpoint rather than migrated.
"""

from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column

from greeter.stores.postgres import Base


class Greeting(Base):
    """Greeting message shown on the home page."""

    __tablename__ = "greetings"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    message: Mapped[str | None] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"<Greeting {self.id}>"
