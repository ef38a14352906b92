# src/geofeed/log.py
import logging


class HealthCheckFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        msg = record.getMessage()
        return "/healthz" not in msg


def setup_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    for logger_name in ["tornado.access", "streamlit.web.server"]:
        logger = logging.getLogger(logger_name)
        logger.addFilter(HealthCheckFilter())
