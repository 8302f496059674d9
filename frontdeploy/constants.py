"""
frontdeploy Constants

Centralized defaults for the deploy pipeline.
"""

# Build defaults
DEFAULT_BUILD_COMMAND = "npm ci && npm run build"
DEFAULT_BUILD_DIR = "dist"

# Paths never synced (passed verbatim to rsync --exclude, relative to the source root)
EXCLUDE_PATTERNS = (
    ".git",
    "node_modules",
    "vendor",
    ".env",
    "backups",
    "dist/.DS_Store",
)

# Rsync Configuration
RSYNC_BASE_FLAGS = ["-avz", "--delete"]

# Backup Configuration
BACKUP_DIR_NAME = "backups"
BACKUP_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"
BACKUP_NAME_FORMAT = "backup_{timestamp}.tar.gz"

# Permission normalization
DEFAULT_OWNER = "www-data:www-data"

# SSH Configuration (key-based auth only, never prompt)
SSH_OPTIONS = [
    "-o",
    "BatchMode=yes",
    "-o",
    "ConnectTimeout=10",
]

# Config file looked up in the working directory
DEFAULT_CONFIG_FILE = "frontdeploy.yml"

# Log Configuration
DEFAULT_LOG_DIR = ".frontdeploy/logs"
LOG_DATE_FORMAT = "%Y-%m-%d"
LOG_TIME_FORMAT = "%H-%M-%S"

# Seconds a child gets to exit after SIGTERM before SIGKILL
TERMINATE_GRACE_SECONDS = 5

# Tool Names (checked before any side effect)
REQUIRED_TOOLS = [
    "rsync",
    "ssh",
]
