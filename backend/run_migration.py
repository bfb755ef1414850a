"""
Run the diary privacy migrations in order.
"""
import sys
import os

# Add the backend directory to Python path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from journal.db.migrations import clear_plaintext_summaries, encrypt_legacy_fields


if __name__ == "__main__":
    clear_plaintext_summaries.migrate()
    encrypt_legacy_fields.migrate()
