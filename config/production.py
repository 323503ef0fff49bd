import os

from config.config import app_db_config, device_db_config, env_flag, sync_config

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = app_db_config()
DEVICE_DB_CONFIG = device_db_config()
SYNC_CONFIG = sync_config()

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
