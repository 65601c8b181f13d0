"""
Cowboy Deploy Constants

Centralized constants for magic values, defaults, and configuration.
"""

# Profile Configuration
PROFILE_FILENAME = ".cowboy-deploy.json"
HISTORY_LIMIT = 20
ROLLBACK_CHOICES = 4

# Default FTP Configuration
DEFAULT_FTP_PORT = 21
DEFAULT_REMOTE_PATH = "/"

# Paths never uploaded (written into new profiles by init)
DEFAULT_EXCLUDED_PATHS = [
    ".git",
    ".github",
    "node_modules",
    "vendor",
    "tests",
    ".env",
    ".env.example",
    PROFILE_FILENAME,
    "storage/logs",
    "storage/framework/cache",
    "storage/framework/sessions",
    "storage/framework/views",
]

# `git status --porcelain` lines matching this are build output, not real changes
BUILD_ARTIFACT_PATTERN = r"(public/build|public/js|public/css|public/mix-manifest|dist/)"

# Timeouts (seconds)
FTP_CONNECT_TIMEOUT = 10
TRANSFER_TIMEOUT = 3600

# Transfer tools
GIT_FTP = "git-ftp"
NCFTPPUT = "ncftpput"
GIT_FTP_IGNORE_FILE = ".git-ftp-ignore"

# Git messages
AUTO_STASH_MESSAGE = "Cowboy Deploy auto-stash {timestamp}"
ROLLBACK_STASH_MESSAGE = "Cowboy Deploy rollback stash"
TEMP_COMMIT_MESSAGE = "temp: build artifacts for deployment [cowboy-deploy]"

# Build commands
NPM_INSTALL = ["npm", "install"]
NPM_BUILD = ["npm", "run", "build"]
COMPOSER_INSTALL = ["composer", "install", "--no-dev", "--optimize-autoloader"]
COMPOSER_LOCK = "composer.lock"

# Log Configuration
LOG_DIR_ENV = "COWBOY_LOG_DIR"
DEFAULT_LOG_DIR = "~/.cowboy/logs"
LOG_DATE_FORMAT = "%Y-%m-%d"
LOG_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"

# Error Messages
ERROR_PROFILE_NOT_FOUND = "No deployment config found!"
HINT_RUN_INIT = "Run: cowboy init first to set up deployment."
ERROR_PROFILE_EXISTS = "Deployment config already exists!"
HINT_FORCE_INIT = f"Use --force to overwrite or edit {PROFILE_FILENAME} manually."

# Secret placeholder used in logged command lines
REDACTED = "********"
