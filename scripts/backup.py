"""Backup the four collections to a JSON file.

Note: Uses the configured storage backend, so it works the same for
``memory`` (mostly useful right after an import) and ``mysql``.
"""

from __future__ import annotations

import importlib
import json
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.hour_bank.hour_bank.container import build_container
from src.hour_bank.hour_bank.storage import codecs


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        storage_backend=getattr(settings, "STORAGE_BACKEND", "memory"),
        db_config=getattr(settings, "DB_CONFIG", {}),
    )
    cols = container.collections

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)
    out_file = out_dir / f"hour_bank_{datetime.now().strftime('%Y%m%d_%H%M%S')}.json"

    dump = {
        "employees": [codecs.employee_to_dict(e) for e in cols.employees.get()],
        "records": [codecs.record_to_dict(r) for r in cols.records.get()],
        "transactions": [codecs.transaction_to_dict(t) for t in cols.transactions.get()],
        "settings": [codecs.settings_to_dict(s) for s in cols.settings.get()],
    }
    out_file.write_text(json.dumps(dump, ensure_ascii=False, indent=2), encoding="utf-8")
    print(f"OK: Backup created: {out_file}")


if __name__ == "__main__":
    main()
