# ghdash/models/issue.py
from sqlalchemy import Boolean, Column, Integer, String
from ghdash.core.db import Base


class Issue(Base):
    __tablename__ = "issues"

    id = Column(Integer, primary_key=True, autoincrement=False)  # GitHub issue id
    number = Column(Integer, nullable=False)
    title = Column(String, nullable=False)
    author = Column(String, nullable=False)                  # author login
    author_id = Column(Integer, nullable=False)
    url = Column(String, nullable=False)                     # html url
    repo_owner = Column(String, nullable=False)
    repo_name = Column(String, nullable=False)
    state = Column(String, nullable=False)                   # "open", "closed"

    # Unix epoch seconds
    created_at = Column(Integer, nullable=False)
    updated_at = Column(Integer, nullable=False)
    closed_at = Column(Integer, nullable=True)

    is_pull_request = Column(Boolean, nullable=False, default=False)
    last_viewed = Column(Integer, nullable=True)
