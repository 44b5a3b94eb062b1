"""Global constants for launchpd"""

import re

APP_NAME = "launchpd"
LOG_FORMAT = "%(message)s"

# Service endpoints
DEFAULT_DOMAIN = "launchpd.cloud"
PUBLIC_BETA_API_KEY = "public-beta-key"
REGISTER_URL_TEMPLATE = "https://{domain}/"
STATUS_URL_TEMPLATE = "https://status.{domain}"
DEFAULT_TIMEOUT = 30.0  # seconds

# Local state
DEFAULT_CONFIG_DIR = "~/.staticlaunch"
CREDENTIALS_FILE = "credentials.json"
CLIENT_TOKEN_FILE = "client_token"
DEPLOYMENTS_FILE = "deployments.json"
SETTINGS_FILE = "config.yaml"
PROJECT_LINK_FILE = ".launchpd.json"
DEPLOYMENTS_FILE_VERSION = 1

# Identity
CLIENT_TOKEN_PREFIX = "cli_"
CLIENT_TOKEN_PATTERN = re.compile(r"^cli_[a-f0-9]{32}$")
API_KEY_PREFIX = "lpd_"
DEFAULT_TIER = "free"

# Subdomains
SUBDOMAIN_PATTERN = re.compile(r"^[a-z0-9]([a-z0-9-]*[a-z0-9])?$")
SUBDOMAIN_ALPHABET = "abcdefghijklmnopqrstuvwxyz0123456789"
GENERATED_SUBDOMAIN_LENGTH = 12

# Expiration
EXPIRATION_PATTERN = re.compile(r"^(\d+)([mhd])$", re.IGNORECASE)
MIN_EXPIRATION_MINUTES = 30

# Quota
QUOTA_WARNING_RATIO = 0.8

# Endpoint guard
ENDPOINT_ALLOWED_PATTERN = re.compile(r"^[a-zA-Z0-9/\-_.?=&%]+$")

# Reporting
MAX_LISTED_VIOLATIONS = 10
MAX_SUGGESTIONS = 3

# Tier limits shown to users
ANONYMOUS_LIMITS = {
    "max_sites": 3,
    "max_storage_mb": 50,
    "retention_days": 7,
    "max_versions": 1,
}
REGISTERED_LIMITS = {
    "max_sites": 10,
    "max_storage_mb": 100,
    "retention_days": 30,
    "max_versions": 10,
}

# Static content classification
ALLOWED_EXTENSIONS = frozenset({
    # Markup
    ".html", ".htm",
    # Styles
    ".css", ".scss", ".sass",
    # Scripts and data
    ".js", ".mjs", ".cjs", ".json", ".jsonld",
    # Images
    ".svg", ".png", ".jpg", ".jpeg", ".gif", ".webp", ".ico", ".avif",
    # Fonts
    ".woff", ".woff2", ".ttf", ".otf", ".eot",
    # Media
    ".mp4", ".webm", ".ogg", ".mp3", ".wav", ".flac",
    # Documents
    ".pdf", ".txt", ".md", ".xml", ".yaml", ".yml",
})

FORBIDDEN_INDICATORS = frozenset({
    # Package manifests and lockfiles
    "package.json", "package-lock.json", "yarn.lock", "pnpm-lock.yaml",
    "composer.json", "requirements.txt", "gemfile", "makefile",
    "tsconfig.json",
    # Framework configs
    "next.config.js", "nuxt.config.js", "svelte.config.js", "vite.config.js",
    "webpack.config.js", "rollup.config.js", "angular.json",
    # Source extensions that need a build step or a server
    ".jsx", ".tsx", ".ts", ".vue", ".svelte",
    ".php", ".py", ".rb", ".go", ".rs", ".java", ".cs", ".cpp", ".c",
    # Environment and containers
    ".env", ".env.local", ".env.production", ".dockerfile", "docker-compose.yml",
    # Version control
    ".git", ".svn", ".hg",
})

IGNORE_DIRECTORIES = frozenset({
    "node_modules", ".git", ".svn", ".hg",
    "vendor", "composer",
    ".env", ".env.local", ".env.production", ".env.development",
    "dist", "build", ".next", ".nuxt", ".svelte-kit",
    "coverage", ".cache",
})

IGNORE_FILES = frozenset({
    PROJECT_LINK_FILE,
    "package-lock.json", "yarn.lock", "pnpm-lock.yaml",
    ".DS_Store", "Thumbs.db", "desktop.ini",
    ".gitignore", ".npmignore",
    "README.md", "LICENSE",
})

# Error codes
class ErrorCode:
    CONFIG_FORMAT_ERROR = "LP001"
    FOLDER_NOT_FOUND = "LP002"
    EXPIRATION_FORMAT_ERROR = "LP003"
    NETWORK_UNREACHABLE = "LP004"
    AUTHENTICATION_FAILED = "LP005"
    TWO_FACTOR_REQUIRED = "LP006"
    STATIC_VALIDATION_FAILED = "LP007"
    SERVICE_MAINTENANCE = "LP008"
    MISSING_REQUIRED_PARAMETER = "LP009"
    SUBDOMAIN_INVALID = "LP010"
    SUBDOMAIN_TAKEN = "LP011"
    QUOTA_EXCEEDED = "LP012"
    RATE_LIMITED = "LP013"
    EMPTY_FOLDER = "LP014"
    UPLOAD_FAILED = "LP015"
    VERSION_NOT_FOUND = "LP016"
    ROLLBACK_FAILED = "LP017"
    API_ERROR = "LP018"
    USER_CANCELLED = "LP019"
    NOT_AVAILABLE = "LP020"

# Environment variables
ENV_API_KEY = "STATICLAUNCH_API_KEY"
ENV_API_SECRET = "STATICLAUNCH_API_SECRET"
ENV_DOMAIN = "LAUNCHPD_DOMAIN"
ENV_DEBUG = "LAUNCHPD_DEBUG"
ENV_CONFIG_DIR = "LAUNCHPD_CONFIG_DIR"

# Display constants
EMOJI_SUCCESS = "✓"
EMOJI_ERROR = "✗"
EMOJI_WARNING = "⚠"
EMOJI_INFO = "ℹ"
EMOJI_ARROW = "→"
EMOJI_ROCKET = "🚀"
EMOJI_FOLDER = "📁"
EMOJI_LINK = "🔗"
EMOJI_CLOCK = "⏰"

# Message templates
MSG_DEPLOY_SUCCESS = f"{EMOJI_ROCKET} Deployed successfully! (v{{version}})"
MSG_ROLLBACK_SUCCESS = f"{EMOJI_SUCCESS} Rolled back {{subdomain}} to v{{version}}"
MSG_LINK_UPDATED = f"{EMOJI_LINK} Project linked: {{folder}} {EMOJI_ARROW} {{subdomain}}"
MSG_QUOTA_UNVERIFIED = "Could not verify quota (API unavailable)"
MSG_AVAILABILITY_UNVERIFIED = "Could not verify subdomain availability (skipping check)"
MSG_LOGIN_REQUIRED = 'Run "launchpd login" to authenticate'

# Interactive prompts
PROMPT_UPDATE_LINK = "Would you like to update this project's default subdomain to \"{subdomain}\"?"
PROMPT_AUTO_INIT = "Run \"launchpd init\" to link '{folder}' to '{subdomain}'?"
PROMPT_RELINK = "This project is already linked to \"{subdomain}\". Link it to \"{new_subdomain}\" instead?"
