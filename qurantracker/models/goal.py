from datetime import date

from sqlalchemy import Date, Integer
from sqlalchemy.orm import Mapped, mapped_column

from qurantracker.database import Base


class Goal(Base):
    __tablename__ = "goals"

    year: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    start_date: Mapped[date] = mapped_column(Date)
    end_date: Mapped[date] = mapped_column(Date)
    daily_goal: Mapped[int] = mapped_column(Integer)
    target_pages: Mapped[int] = mapped_column(Integer)
