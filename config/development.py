import os

from config.config import app_db_config, device_db_config, env_flag, sync_config

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = app_db_config(default_password="123456")
DEVICE_DB_CONFIG = device_db_config()
SYNC_CONFIG = sync_config()

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")
