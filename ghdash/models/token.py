# ghdash/models/token.py
from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint
from ghdash.core.db import Base

class Token(Base):
    __tablename__ = "tokens"
    __table_args__ = (
        UniqueConstraint("token", "user_id"),
        {"sqlite_autoincrement": True},  # ids never reused, so MAX(id) is the newest row
    )

    id = Column(Integer, primary_key=True)
    token = Column(String, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
