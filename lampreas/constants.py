"""Application-wide constants."""

APP_NAME = "Lampreas Violeta"
APP_VERSION = "0.1.0"
APP_ORGANIZATION = "Lampreas Violeta"

# Window constraints
MIN_WINDOW_WIDTH = 1100
MIN_WINDOW_HEIGHT = 650
SIDEBAR_WIDTH = 220

# Database
DB_CONFIG_PATH = "config/db.properties"
DB_URL_KEY = "db.url"
DB_USER_KEY = "db.user"
DB_PASSWORD_KEY = "db.password"
REQUIRED_DB_KEYS = [DB_URL_KEY, DB_USER_KEY, DB_PASSWORD_KEY]
SQLITE_URL_PREFIX = "sqlite:///"

# Export
EXPORT_DIR = "exports"
EXPORT_INDENT = 2
CLIENTS_EXPORT_FILENAME = "clientes.json"
AGENTS_EXPORT_FILENAME = "comerciales.json"
DRIVERS_EXPORT_FILENAME = "repartidores.json"

# UI language
DEFAULT_LANGUAGE = "es"
