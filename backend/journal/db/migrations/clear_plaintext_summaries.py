"""
Migration script to blank diary summaries written by older versions.

Summaries used to be derived from decrypted content and stored next to the
ciphertext. They are now derived on read only, so any stored value is a
plaintext leak.
"""
from sqlalchemy import text
from journal.db.session import SessionLocal


def migrate():
    """Set every non-empty diaries.summary to ''."""
    db = SessionLocal()
    try:
        result = db.execute(text("""
            UPDATE diaries
            SET summary = ''
            WHERE summary IS NULL OR summary <> ''
        """))
        print(f"Cleared {result.rowcount} stored summaries")

        db.commit()
        print("Migration completed successfully!")
    except Exception as e:
        db.rollback()
        print(f"Migration failed: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    migrate()
