from datetime import datetime, timezone
from sqlalchemy import DateTime, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column
from app.core.database import Base


class UserProgress(Base):
    """Append-only listening log. Rows are never updated; stats are aggregated from them."""
    __tablename__ = "user_progress"

    id:               Mapped[int]      = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id:          Mapped[int]      = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    session_id:       Mapped[int]      = mapped_column(Integer, ForeignKey("sessions.id", ondelete="CASCADE"), nullable=False)
    minutes_listened: Mapped[int]      = mapped_column(Integer, nullable=False)
    completed_at:     Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
