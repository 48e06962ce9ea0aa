"""
Company Database Model

SQLAlchemy model for companies in the Jobly application. Used to create the
``companies`` table; queries against it are issued as parameterized SQL by
the repository layer.
"""

from typing import Optional

from sqlalchemy import CheckConstraint, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from jobly.core.database import Base


class Company(Base):
    """
    Company model.

    Represents companies that post job opportunities. ``handle`` is the
    natural key.
    """

    __tablename__ = "companies"

    handle: Mapped[str] = mapped_column(String(25), primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    num_employees: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    logo_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    __table_args__ = (
        CheckConstraint("handle = lower(handle)", name="ck_company_handle_lower"),
        CheckConstraint("num_employees >= 0", name="ck_company_num_employees"),
    )

    def __repr__(self) -> str:
        """String representation of Company."""
        return f"<Company(handle='{self.handle}', name='{self.name}')>"
