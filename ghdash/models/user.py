# ghdash/models/user.py
from sqlalchemy import Column, Integer, String
from ghdash.core.db import Base

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=False)  # GitHub user id
    login = Column(String, unique=True, nullable=False)
    avatar_url = Column(String, nullable=False)
    name = Column(String, nullable=False)
