from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class Genre(str, Enum):
    NOVEL = "소설"
    ESSAY = "에세이"
    COMPUTING = "컴퓨터/IT"
    HOBBY = "취미/실용/스포츠"
    TRAVEL = "여행"
    DRAMA = "희곡"
    BUSINESS = "경제/경영"
    HISTORY = "역사/문화"
    ARTS = "예술/대중문화"
    RELIGION = "종교"
    POETRY = "시"
    SELF_HELP = "자기계발"
    HUMANITIES = "인문/철학/심리학"
    SCIENCE = "과학/기술"
    SOCIETY = "정치/사회/환경"


class StoredModel(BaseModel):
    # Stored blobs may come from older builds carrying extra keys.
    model_config = ConfigDict(extra="ignore", use_enum_values=True)


class Group(StoredModel):
    code: str
    name: str
    leader_name: str
    max_members: int = 5
    description: str = ""
    password: Optional[str] = None


class UserProfile(StoredModel):
    group_id: str
    name: str
    profile_image: str = ""
    password: Optional[str] = None


class Session(StoredModel):
    group: Group
    user: UserProfile


class BookRecord(StoredModel):
    id: str
    group_id: str
    title: str
    author_name: str
    writer: str = ""
    publisher: str = ""
    genre: Genre = Genre.NOVEL
    pages: int = 0
    start_date: str = ""
    end_date: str = ""
    record_date: str = ""
    cover_image: str = ""
    rating: float = 0.0
    review: str = ""
    timestamp: int = 0


class RecordDraft(StoredModel):
    """An unsubmitted record form; every field may still be missing."""

    title: Optional[str] = None
    author_name: Optional[str] = None
    writer: Optional[str] = None
    publisher: Optional[str] = None
    genre: Optional[Genre] = None
    pages: Optional[int] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    record_date: Optional[str] = None
    cover_image: Optional[str] = None
    rating: Optional[float] = None
    review: Optional[str] = None

    def merged(self, other: "RecordDraft") -> "RecordDraft":
        """Overlay the fields ``other`` has filled in on top of this draft."""
        data = self.model_dump()
        data.update(other.model_dump(exclude_none=True))
        return RecordDraft.model_validate(data)

    def filled(self) -> dict:
        return self.model_dump(exclude_none=True)


class Shelf(BaseModel):
    """Records sharing a title, shown as one spine on the shelf."""

    title: str
    records: List[BookRecord] = Field(default_factory=list)

    @property
    def cover(self) -> BookRecord:
        return self.records[0]
