# ghdash/models/pull_request.py
from sqlalchemy import Boolean, Column, Integer, String, ForeignKey
from ghdash.core.db import Base


class PullRequest(Base):
    """Pull-request specific columns; shares its primary key with `issues`."""

    __tablename__ = "pull_requests"

    id = Column(Integer, ForeignKey("issues.id"), primary_key=True, autoincrement=False)
    is_draft = Column(Boolean, nullable=False, default=False)
    review_decision = Column(String, nullable=False, default="")  # "APPROVED", "CHANGES_REQUESTED", ...
    merged_at = Column(Integer, nullable=True)
