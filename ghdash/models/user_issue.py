# ghdash/models/user_issue.py
from sqlalchemy import Column, Integer, ForeignKey
from ghdash.core.db import Base

class UserIssue(Base):
    __tablename__ = "user_issues"

    user_id = Column(Integer, ForeignKey("users.id"), primary_key=True)
    issue_id = Column(Integer, ForeignKey("issues.id"), primary_key=True)
