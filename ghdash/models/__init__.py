from ghdash.models.setting import Setting
from ghdash.models.user import User
from ghdash.models.issue import Issue
from ghdash.models.pull_request import PullRequest
from ghdash.models.user_issue import UserIssue
from ghdash.models.user_refresh import UserRefresh
from ghdash.models.token import Token

__all__ = [
    "Setting",
    "User",
    "Issue",
    "PullRequest",
    "UserIssue",
    "UserRefresh",
    "Token",
]
