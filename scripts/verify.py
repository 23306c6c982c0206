"""
Order Ledger Verification Script

Checks the Excel ledger written by the export worker: columns, duplicate
ids, and that every row's total equals subtotal plus delivery fee.
Run from project root: python scripts/verify.py

Version: 1.0.0
"""

import os
import sys
from datetime import datetime

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pandas as pd  # noqa: E402

from storefront.core.config import get_settings  # noqa: E402
from storefront.services.order_ledger import OrderLedger  # noqa: E402


def verify_ledger() -> bool:
    """Verify ledger integrity after a simulation run."""
    settings = get_settings()
    ledger_file = settings.ledger_path
    symbol = settings.currency_symbol

    print("=" * 60)
    print("🔍 ORDER LEDGER VERIFICATION REPORT")
    print("=" * 60)
    print(f"⏰ Timestamp: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print(f"📄 File: {ledger_file}")
    print("=" * 60)

    if not ledger_file.exists():
        print("\n❌ Ledger file not found!")
        print("   Enable LEDGER_EXPORT_ENABLED and run: python scripts/simulate.py")
        return False

    try:
        df = pd.read_excel(ledger_file, engine="openpyxl")
        print("\n✅ File loaded successfully!")
    except Exception as e:
        print(f"\n❌ Could not read ledger: {e}")
        return False

    print("\n📊 STATISTICS:")
    print(f"   Total Orders: {len(df)}")
    print(f"   Columns: {len(df.columns)}")

    missing = [col for col in OrderLedger.ORDER_COLUMNS if col not in df.columns]
    if missing:
        print(f"\n⚠️ Missing Columns: {missing}")
        return False
    print("✅ All ledger columns present")

    duplicates = df["order_id"].duplicated().sum()
    if duplicates > 0:
        print(f"\n⚠️ {duplicates} duplicate order IDs found!")
    else:
        print("✅ No duplicate order IDs")

    mismatched = df[(df["subtotal"] + df["delivery_fee"] - df["total"]).abs() > 0.01]
    if len(mismatched) > 0:
        print(f"\n⚠️ {len(mismatched)} orders where total != subtotal + delivery fee")
    else:
        print("✅ Every total equals subtotal + delivery fee")

    print("\n💰 REVENUE:")
    print(f"   Total: {symbol}{df['total'].sum():.2f}")
    print(f"   Average: {symbol}{df['total'].mean():.2f}")
    print(f"   Dishes sold: {int(df['item_count'].sum())}")

    print("\n📋 RECENT ORDERS:")
    print("-" * 60)
    if len(df) > 0:
        cols = ["order_id", "customer_name", "payment", "total"]
        print(df[cols].tail(5).to_string(index=False))

    print("\n" + "=" * 60)
    print("✅ VERIFICATION COMPLETE")
    print("=" * 60)

    return duplicates == 0 and len(mismatched) == 0


if __name__ == "__main__":
    sys.exit(0 if verify_ledger() else 1)
