import logging
import os

DEFAULT_LOG_FILE = "/tmp/resource_scaler.log"
LOG_FORMAT = '%(asctime)s %(name)-12s - %(levelname)6s - %(message)s'


class AdapterLogger:
    def __init__(self, name: str, level: int = logging.INFO, logfile: str | None = None):
        if logfile is None:
            logfile = os.getenv("SCALER_LOG_FILE", DEFAULT_LOG_FILE)
        # stdout carries the JSON answer, keep logs on stderr
        sh = logging.StreamHandler()
        sh.setLevel(level)
        self.handlers: list[logging.Handler] = [sh]
        if logfile:
            fh = logging.FileHandler(logfile)
            fh.setLevel(level)
            self.handlers.insert(0, fh)
        logging.basicConfig(
            level=level,
            format=LOG_FORMAT,
            handlers=self.handlers)
        self.logger = logging.getLogger(name)

    def set_level(self, level: int) -> None:
        """Change the threshold of the root logger and of our handlers."""
        logging.getLogger().setLevel(level)
        for handler in self.handlers:
            handler.setLevel(level)
