#!/usr/bin/env python3
"""
Create the vows tables, seed the unlock gate (locked) and provision the admin password.
Run from the project root: python -m scripts.setup_vows_db --password '...'
or: PYTHONPATH=. python scripts/setup_vows_db.py
The password can also come from VOWS_ADMIN_PASSWORD.
"""
import argparse
import os
import sys

# project root on PYTHONPATH
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from vowsite.db.init_db import init_db
from vowsite.db.session import SessionLocal
from vowsite.models.admin_setting import ADMIN_PASSWORD_KEY, AdminSetting
from vowsite.models.unlock_status import UnlockStatus
from vowsite.services.auth.admin_password import HASH_PREFIX, hash_password
from vowsite.services.unlock.service import STATUS_ROW_ID


def provision(db, password: str | None, hashed: bool) -> list[str]:
    """Seed missing rows; returns what was done."""
    if password and not hashed and password.startswith(HASH_PREFIX):
        raise ValueError(f"A plain password cannot start with {HASH_PREFIX!r}; use --hash or pick another")
    done = []
    if db.query(UnlockStatus).filter(UnlockStatus.id == STATUS_ROW_ID).first() is None:
        db.add(UnlockStatus(id=STATUS_ROW_ID, is_unlocked=False))
        done.append("unlock_status: created (locked)")
    if password:
        value = hash_password(password) if hashed else password
        row = db.query(AdminSetting).filter(AdminSetting.setting_key == ADMIN_PASSWORD_KEY).first()
        if row is None:
            db.add(AdminSetting(setting_key=ADMIN_PASSWORD_KEY, setting_value=value))
            done.append("admin_password: created")
        else:
            row.setting_value = value
            done.append("admin_password: updated")
    db.commit()
    return done


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Set up the vows database.")
    parser.add_argument("--password", default=os.environ.get("VOWS_ADMIN_PASSWORD"))
    parser.add_argument("--hash", action="store_true", help="Store a sha256 digest instead of the plain password")
    args = parser.parse_args(argv)

    if not init_db():
        print("Failed to create tables, see log output.")
        return 1
    db = SessionLocal()
    try:
        done = provision(db, args.password, args.hash)
    except ValueError as e:
        print(e)
        return 1
    finally:
        db.close()

    print("Vows database ready. Tables: vows, unlock_status, admin_settings")
    for line in done:
        print(f"  - {line}")
    if not args.password:
        print("Admin password not provisioned (pass --password or set VOWS_ADMIN_PASSWORD).")
    return 0


if __name__ == "__main__":
    sys.exit(main())
