# ghdash/models/setting.py
from sqlalchemy import Column, String
from ghdash.core.db import Base

class Setting(Base):
    __tablename__ = "settings"

    key = Column(String, primary_key=True)
    value = Column(String, nullable=False)
