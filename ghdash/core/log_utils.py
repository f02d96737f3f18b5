# ghdash/core/log_utils.py
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def redact_token(token: str | None) -> str:
    """Keep only the last four characters of a credential for log output."""
    if not token:
        return "<none>"
    if len(token) <= 4:
        return "****"
    return "****" + token[-4:]
