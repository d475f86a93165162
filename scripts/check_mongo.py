from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from modules.storage import MONGODB_DB, backend_name, check_connection  # noqa: E402


def main() -> int:
    ok = check_connection()
    status = "OK" if ok else "FAILED"
    print(f"Storage connection {status} (backend={backend_name()}, db={MONGODB_DB})")
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
