#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Users table over SQLite

Commands:
  demo                Create the table, insert Alice and Bob, print, update Bob, print (default)
  list                Print every row of the Users table
  add                 Insert one user (--name, --age)
  update              Overwrite name/age of one user (--id, --name, --age)
  export              Write the Users table to a CSV file (--out)

Notes:
- The database path comes from --db, else USERDB_PATH, else config.yaml (default test.db).
- A failure prints "Error: <message>" to stderr. The exit status stays 0 unless
  --strict-exit (or strict_exit: true in config.yaml) is set.
"""

import argparse
import sys

from userdb.db import DatabaseConnection, get_db_path
from userdb.domain.cell import Row
from userdb.errors import UserDbError
from userdb.logs import configure_logging
from userdb.repository import user_repo
from userdb.services.config_svc import get_config
from userdb.services.report_svc import export_users_csv

ROW_SEPARATOR = "-----------------------"


def print_row(row: Row, out=None):
    out = out or sys.stdout
    for col, cell in row:
        print(f"{col}: {cell.display()}", file=out)
    print(ROW_SEPARATOR, file=out)


# ---------------- Demo ----------------

def run_demo(conn, out):
    user_repo.ensure_schema(conn)
    print("Table created successfully!", file=out)

    user_repo.insert(conn, "Alice", 25)
    print("Operation completed successfully!", file=out)
    user_repo.insert(conn, "Bob", 30)
    print("Operation completed successfully!", file=out)

    print("Current Records:", file=out)
    user_repo.read_all(conn, lambda row: print_row(row, out))

    print("Updating Bob's age to 35:", file=out)
    user_repo.update(conn, 2, "Bob", 35)
    print("Record updated successfully!", file=out)

    print("Records After Update:", file=out)
    user_repo.read_all(conn, lambda row: print_row(row, out))


def cmd_demo(args, out):
    db = DatabaseConnection(args.db_path)
    print("Database opened successfully!", file=out)
    try:
        run_demo(db.conn, out)
    finally:
        db.close()
        print("Database closed successfully!", file=out)


# ---------------- Single operations ----------------

def cmd_list(args, out):
    with DatabaseConnection(args.db_path) as db:
        user_repo.ensure_schema(db.conn)
        user_repo.read_all(db.conn, lambda row: print_row(row, out))


def cmd_add(args, out):
    with DatabaseConnection(args.db_path) as db:
        user_repo.ensure_schema(db.conn)
        user_repo.insert(db.conn, args.name, args.age)
    print("Operation completed successfully!", file=out)


def cmd_update(args, out):
    with DatabaseConnection(args.db_path) as db:
        user_repo.ensure_schema(db.conn)
        user_repo.update(db.conn, args.id, args.name, args.age)
    print("Record updated successfully!", file=out)


def cmd_export(args, out):
    with DatabaseConnection(args.db_path) as db:
        user_repo.ensure_schema(db.conn)
    n = export_users_csv(args.out, db_path=args.db_path)
    print(f"{n} rows exported to {args.out}", file=out)


# ---------------- Entry ----------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Users table over SQLite")
    parser.add_argument("--config", default=None, help="path to config.yaml")
    parser.add_argument("--db", default=None, help="database file (overrides config)")
    parser.add_argument("--strict-exit", action="store_true", default=None,
                        help="exit with status 1 when an operation fails")
    sub = parser.add_subparsers()

    p_demo = sub.add_parser("demo", help="run the fixed demo sequence")
    p_demo.set_defaults(func=cmd_demo)

    p_list = sub.add_parser("list", help="print all users")
    p_list.set_defaults(func=cmd_list)

    p_add = sub.add_parser("add", help="insert a user")
    p_add.add_argument("--name", required=True)
    p_add.add_argument("--age", required=True, type=int)
    p_add.set_defaults(func=cmd_add)

    p_upd = sub.add_parser("update", help="update a user by id")
    p_upd.add_argument("--id", required=True, type=int)
    p_upd.add_argument("--name", required=True)
    p_upd.add_argument("--age", required=True, type=int)
    p_upd.set_defaults(func=cmd_update)

    p_exp = sub.add_parser("export", help="export users to CSV")
    p_exp.add_argument("--out", default="exports/users.csv")
    p_exp.set_defaults(func=cmd_export)

    return parser


def main(argv=None, out=None, err=None) -> int:
    out = out or sys.stdout
    err = err or sys.stderr
    args = build_parser().parse_args(argv)
    cfg = get_config(args.config)
    configure_logging(cfg["log_level"])

    strict = cfg["strict_exit"] if args.strict_exit is None else args.strict_exit
    func = getattr(args, "func", cmd_demo)
    try:
        args.db_path = args.db or get_db_path(args.config)
        func(args, out)
    except (UserDbError, OSError) as e:
        print(f"Error: {e}", file=err)
        return 1 if strict else 0
    return 0


if __name__ == "__main__":
    sys.exit(main())
