from enum import Enum


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


# Human readable timestamp used in notifications and generated documents
DISPLAY_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

# Compact timestamp used inside generated identifiers
COMPACT_TIME_FORMAT = "%Y%m%d_%H%M%S"

SSE_MEDIA_TYPE = "text/event-stream"

# Route catalogue reported by /api/info
API_ENDPOINTS = {
    "process": "POST /api/process",
    "process_stream": "POST /api/process/stream",
    "process_batch": "POST /api/process-batch",
    "chat": "POST /api/chat",
    "session_reset": "POST /api/session/reset/{case_id}",
    "monitor_status": "GET /api/monitor/status",
    "monitor_logs": "GET /api/monitor/logs",
    "health": "GET /api/health",
    "info": "GET /api/info",
}
