from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.core.database import Base


class Teacher(Base):
    __tablename__ = "teachers"

    id:         Mapped[int]        = mapped_column(Integer, primary_key=True, autoincrement=True, index=True)
    name:       Mapped[str]        = mapped_column(String(255), nullable=False)
    bio:        Mapped[str]        = mapped_column(Text, nullable=False)
    avatar_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    specialty:  Mapped[str]        = mapped_column(String(255), nullable=False)

    # Deleting a teacher detaches its sessions (teacher_id -> NULL), never deletes them
    sessions = relationship("Session", back_populates="teacher", passive_deletes=True)

    def __repr__(self) -> str:
        return f"<Teacher id={self.id} name={self.name!r}>"
