"""Script to selectively clear data from the marketplace database."""

import argparse
import logging
import sys
from pathlib import Path

from sqlalchemy import create_engine, inspect, text

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from config import settings

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

OFFER_TABLES = ["match_feedback", "product_offers"]
CATALOG_TABLES = ["catalog_keywords", "catalog_items"]
ACCOUNT_TABLES = ["vendors", "categories"]


def tables_to_clear(clear_catalog: bool = False, clear_all: bool = False) -> list[str]:
    tables = list(OFFER_TABLES)
    if clear_catalog or clear_all:
        tables += CATALOG_TABLES
    if clear_all:
        tables += ACCOUNT_TABLES
    return tables


def _tables_in_order(existing: list[str], order: list[str]) -> list[str]:
    present = set(existing)
    return [table for table in order if table in present]


def clear_data(clear_catalog: bool = False, clear_all: bool = False, database_url: str | None = None) -> dict[str, int]:
    engine = create_engine(database_url or settings.database_url)
    deleted: dict[str, int] = {}
    try:
        with engine.begin() as connection:
            existing = inspect(connection).get_table_names()
            for table in _tables_in_order(existing, tables_to_clear(clear_catalog, clear_all)):
                logger.info(f"  Deleting from {table}...")
                result = connection.execute(text(f"DELETE FROM {table}"))
                deleted[table] = result.rowcount
                logger.info(f"    {table}: {result.rowcount} rows deleted")
        logger.info("✓ Data cleared successfully")
    except Exception as e:
        logger.error(f"✗ Error clearing data: {e}")
        raise
    finally:
        engine.dispose()
    return deleted


def main() -> None:
    parser = argparse.ArgumentParser(description="Clear data from the MarketMatch database")
    parser.add_argument(
        "--catalog",
        action="store_true",
        default=False,
        help="Also clear catalog items and their keyword index",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        default=False,
        help="Clear everything including vendors and categories",
    )
    parser.add_argument(
        "--yes",
        action="store_true",
        default=False,
        help="Skip confirmation prompt (useful for scripts)"
    )

    args = parser.parse_args()

    print("=" * 60)
    print("MarketMatch Data Clear Utility")
    print("=" * 60)
    print("This will delete from: " + ", ".join(tables_to_clear(args.catalog, args.all)))

    if not args.yes:
        print("\n" + "=" * 60)
        try:
            confirmation = input("Are you sure you want to proceed? (yes/no): ")
        except EOFError:
            print("\n⚠  No terminal input available. Use --yes flag to skip confirmation.")
            print("Operation cancelled.")
            sys.exit(1)

        if confirmation.lower() != "yes":
            print("Operation cancelled.")
            sys.exit(0)

    try:
        clear_data(args.catalog, args.all)
        print("\n✅ Operation completed successfully!")
    except Exception as e:
        print(f"\n❌ Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
