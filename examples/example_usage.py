"""Example: run a sync pass through the service layer (no Flask).

Controllers are a thin layer; the pass itself lives in SyncOrchestrator.
"""

import importlib
import json

from dotenv import load_dotenv

from config import get_settings_module

from src.biometric_sync.biometric_sync.container import build_container_from_settings
from src.biometric_sync.biometric_sync.sync.model import SyncOptions


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container_from_settings(settings)

    result = container.sync_orchestrator.run_pass(SyncOptions(manual_trigger=True, lookback_days=1))
    print(json.dumps(result.to_dict(), indent=2))


if __name__ == "__main__":
    main()
