#!/usr/bin/env python3
"""
Check that the configured content storage is reachable.

Usage:
    python scripts/check_storage.py
    python scripts/check_storage.py --list
    python scripts/check_storage.py --storage "Type=ftp;Address=ftp.example.com;Username=u;Password=p"
"""

import argparse
import asyncio
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from content_store.core.config import Settings, get_settings  # noqa: E402
from content_store.core.exceptions import ContentStoreError  # noqa: E402
from content_store.core.logging import configure_logging  # noqa: E402
from content_store.services.content import StorageService  # noqa: E402


async def check(settings: Settings, list_files: bool) -> None:
    """Connect to the backend and optionally print its root listing."""
    service = StorageService(
        configuration=settings.backend_configuration(),
        content_root=settings.content_root_path,
    )
    await service.connect()

    if list_files:
        files = await service.list_files()
        for item in sorted(files, key=lambda f: f.storage_key):
            created = item.created_at.isoformat() if item.created_at else "-"
            print(f"  {item.storage_key:<48} {item.length:>12}  {created}")
        print(f"  {len(files)} file(s)")


def main():
    parser = argparse.ArgumentParser(description="Check content storage connectivity")
    parser.add_argument("--storage", help="Override the CONTENT_STORAGE connection string")
    parser.add_argument("--list", action="store_true", help="List files in the storage root")
    args = parser.parse_args()

    settings = get_settings()
    if args.storage:
        settings = settings.model_copy(update={"content_storage": args.storage})
    configure_logging(settings)

    try:
        asyncio.run(check(settings, args.list))
    except ContentStoreError as e:
        print(f"  ✗ {e.error_code}: {e.message}")
        sys.exit(1)

    print("  ✓ Storage reachable")


if __name__ == "__main__":
    main()
