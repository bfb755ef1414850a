"""
Migration script to protect diary metadata stored before encryption was enabled.

Rows whose title/weather/mood/location/music cannot be opened with the
configured key are treated as legacy plaintext and re-protected. Values that
already decrypt are left alone, so the script can be re-run safely.
"""
from journal.core.config import settings
from journal.db.session import SessionLocal
from journal.models.diary import DiaryEntry
from journal.services.confidentiality import SCALAR_FIELDS, FieldCipher

BATCH_SIZE = 200


def migrate():
    """Re-protect legacy plaintext fields of every diary."""
    if settings.aes_key is None:
        print("AES_KEY_BASE64 is not set, nothing to encrypt")
        return

    cipher = FieldCipher(settings.aes_key)
    db = SessionLocal()
    try:
        updated = 0
        last_id = 0
        while True:
            diaries = db.query(DiaryEntry).filter(
                DiaryEntry.id > last_id
            ).order_by(DiaryEntry.id).limit(BATCH_SIZE).all()
            if not diaries:
                break

            for diary in diaries:
                changed = False
                for name in SCALAR_FIELDS:
                    revealed = cipher.reveal_tagged(getattr(diary, name))
                    if revealed.value and not revealed.decrypted:
                        setattr(diary, name, cipher.protect(revealed.value))
                        changed = True
                if changed:
                    updated += 1
            last_id = diaries[-1].id
            db.commit()

        print(f"Protected legacy fields of {updated} diaries")
        print("Migration completed successfully!")
    except Exception as e:
        db.rollback()
        print(f"Migration failed: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    migrate()
