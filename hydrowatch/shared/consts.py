from enum import Enum

# USGS parameter code for discharge (cubic feet per second)
DEFAULT_PARAMETER_CODE = "00060"

# USGS statistic code for the daily mean
DAILY_MEAN_STATISTIC_CODE = "00003"

DEFAULT_USER_AGENT = "hydrowatch/1.0 (contact: dev@hydrowatch)"


class EnumEnvironment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


class EnumLogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"
