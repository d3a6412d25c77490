from enum import auto

from strenum import LowercaseStrEnum

VALID_LOG_LEVELS = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]
MAX_WORKERS = 64

MANIFEST_EXTENSIONS = (".yaml", ".yml")
STDIN_PATH = "-"


class OutputFormat(LowercaseStrEnum):
    Human = auto()
    Json = auto()
    Csv = auto()


class ExitCode:
    Ok = 0
    Failed = 1
    Error = 2
