# ghdash/models/user_refresh.py
from sqlalchemy import Column, Integer, ForeignKey
from ghdash.core.db import Base

class UserRefresh(Base):
    __tablename__ = "user_refresh"

    id = Column(Integer, ForeignKey("users.id"), primary_key=True, autoincrement=False)
    refresh_at = Column(Integer, nullable=True)  # epoch seconds of the next wanted refresh
