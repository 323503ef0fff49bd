from __future__ import annotations

import json

from _bootstrap import load_container


def main() -> None:
    container = load_container()
    states = container.sync_state_repo.list_all()
    print(json.dumps([s.to_dict() for s in states], indent=2))


if __name__ == "__main__":
    main()
