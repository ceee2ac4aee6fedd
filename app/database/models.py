from dataclasses import dataclass
from datetime import datetime


@dataclass
class ResumeRecord:
    """Represents a row from the user_resumes table."""

    owner_id: str
    storage_key: str
    resume_url: str
    file_name: str
    content_type: str
    updated_at: datetime | None = None
