# scripts/smoke.py
"""
Smoke Test Script for inistore.

Usage
-----
1. Load the bundled example configuration:
    $ uv run python scripts/smoke.py

2. Load your own files (later files override earlier ones):
    $ uv run python scripts/smoke.py --file conf/app.conf --file conf/local.conf
"""

import argparse
import logging
import sys
import traceback
from pathlib import Path

from dotenv import load_dotenv

from inistore import InistoreError, load_config_file

# --------------------------------------------------------------------------- #
# Environment Setup
# --------------------------------------------------------------------------- #
env_path = Path(".env")
if env_path.exists():
    load_dotenv(env_path)
    print("✅ Loaded .env file")

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

DEFAULT_FILE = Path(__file__).resolve().parent.parent / "conf" / "app.conf"


def main() -> None:
    """Load the configuration and print every resolved section."""
    parser = argparse.ArgumentParser(description="Run inistore Smoke Test")
    parser.add_argument(
        "--file", "-f", action="append", type=str, help="INI file (repeatable)"
    )
    args = parser.parse_args()

    files = [Path(f) for f in args.file] if args.file else [DEFAULT_FILE]
    for path in files:
        if not path.exists():
            print(f"❌ File not found: {path}")
            return
    print(f"\n📂 Loading: {', '.join(str(p) for p in files)}")

    try:
        store = load_config_file(*files)
    except (InistoreError, OSError) as exc:
        print(f"\n❌ Load failed: {exc}")
        traceback.print_exc()
        return

    print("\n" + "=" * 60)
    print("✅ Loaded Successfully!")
    print("=" * 60)

    for section in store.section_list():
        comments = store.get_section_comments(section)
        if comments:
            print(f"\n{comments}")
        print(f"[{section}]")
        for key, value in store.get_section(section).items():
            print(f"  {key} = {value!r}")

    print("\n🔢 Typed reads:")
    print(f"  server.port (must_int)      = {store.must_int('server', 'port', 80)}")
    print(f"  app.debug (must_bool)       = {store.must_bool('app', 'debug', True)}")
    print(f"  test.f_b (must_float64)     = {store.must_float64('test', 'f_b', 0.0)}")
    print(f"  db.replica.user (fallback)  = {store.must_value('db.replica', 'user', '?')}")


if __name__ == "__main__":
    main()
