from datetime import datetime
from sqlalchemy import Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from app.core.database import Base


class User(Base):
    """
    Listener account.

    Columns:
      id                 INT  — auto-increment primary key
      email              TEXT — unique login email (unique index is the authoritative duplicate check)
      password           TEXT — bcrypt hash (plaintext never stored)
      name               TEXT — display name
      is_premium         BOOL — unlocks premium sessions in the frontend
      total_minutes      INT  — running sum of every recorded listen
      current_streak     INT  — consecutive calendar days with a recorded listen
      last_session_date  TS   — when the last listen was recorded
    """
    __tablename__ = "users"

    id:                Mapped[int]             = mapped_column(Integer, primary_key=True, autoincrement=True, index=True)
    email:             Mapped[str]             = mapped_column(String(255), unique=True, index=True, nullable=False)
    password:          Mapped[str]             = mapped_column(Text, nullable=False)
    name:              Mapped[str]             = mapped_column(String(255), nullable=False)
    is_premium:        Mapped[bool]            = mapped_column(Boolean, default=False, nullable=False, server_default="false")
    total_minutes:     Mapped[int]             = mapped_column(Integer, default=0, nullable=False, server_default="0")
    current_streak:    Mapped[int]             = mapped_column(Integer, default=0, nullable=False, server_default="0")
    last_session_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r} streak={self.current_streak}>"
