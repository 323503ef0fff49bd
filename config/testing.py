import os

from config.config import app_db_config, device_db_config, sync_config

SECRET_KEY = "test-secret"

DB_CONFIG = app_db_config(default_password="12345")
DEVICE_DB_CONFIG = device_db_config()
SYNC_CONFIG = sync_config(scheduler_default="0")

DEBUG = False
TESTING = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

AUTO_INIT_DB = False
