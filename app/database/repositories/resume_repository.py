from psycopg.rows import dict_row

from app.database.connection import get_connection
from app.database.models import ResumeRecord
from app.storage.models import StoredDocument


class ResumeRepository:
    """Keeps each owner's current resume reference in the user_resumes table.

    One row per owner; a new upload replaces the previous reference.
    """

    def save(self, owner_id: str, document: StoredDocument, file_name: str) -> None:
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO user_resumes
                        (owner_id, storage_key, resume_url, file_name, content_type, updated_at)
                    VALUES (%s, %s, %s, %s, %s, NOW())
                    ON CONFLICT (owner_id) DO UPDATE
                    SET storage_key = EXCLUDED.storage_key,
                        resume_url = EXCLUDED.resume_url,
                        file_name = EXCLUDED.file_name,
                        content_type = EXCLUDED.content_type,
                        updated_at = EXCLUDED.updated_at
                    """,
                    (
                        owner_id,
                        document.storage_key,
                        document.public_url,
                        file_name,
                        document.content_type,
                    ),
                )
            conn.commit()

    def find_by_owner(self, owner_id: str) -> ResumeRecord | None:
        """Return the owner's current resume, or None if they never uploaded one."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT owner_id, storage_key, resume_url, file_name,
                           content_type, updated_at
                    FROM user_resumes
                    WHERE owner_id = %s
                    """,
                    (owner_id,),
                )
                row = cur.fetchone()

        if row is None:
            return None

        return ResumeRecord(
            owner_id=row["owner_id"],
            storage_key=row["storage_key"],
            resume_url=row["resume_url"],
            file_name=row["file_name"],
            content_type=row["content_type"],
            updated_at=row["updated_at"],
        )
