import os
import logging

LOG_REQUESTS = os.getenv("DEEPSEEK_LOG_REQUESTS", "false").lower() in {"1", "true", "yes"}
LOG_LEVEL = os.getenv("DEEPSEEK_LOG_LEVEL", "INFO").upper()
_logger = logging.getLogger("deepseek_client.request")
if LOG_REQUESTS:
    # Leave the root logger alone; applications own global logging config.
    _logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
    if not _logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(_logger.level)
        formatter = logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(formatter)
        _logger.addHandler(handler)
        _logger.propagate = False


def log_outgoing(method: str, url: str, body_size: int, user_agent: str) -> None:
    if not LOG_REQUESTS or not _logger.isEnabledFor(logging.DEBUG):
        return
    _logger.debug(
        "outgoing method=%s url=%s content_length=%s ua=%s auth=redacted",
        method,
        url,
        body_size,
        user_agent,
    )


def log_exchange(
    method: str,
    path: str,
    status,
    outcome: str,
    duration_ms: float,
    user_agent: str,
) -> None:
    if not LOG_REQUESTS:
        return
    # The credential is never logged, only noted as present.
    _logger.info(
        "method=%s path=%s status=%s outcome=%s duration_ms=%.2f ua=%s auth=redacted",
        method,
        path,
        status if status is not None else "-",
        outcome,
        duration_ms,
        user_agent,
    )
