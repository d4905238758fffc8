from typing import List, Optional
from pydantic import BaseModel, Field


class Chapter(BaseModel):
    chapterId: str
    type: Optional[str] = None  # "Text" | "Quiz" | "Video"
    title: Optional[str] = None
    content: Optional[str] = None
    video: Optional[str] = None


class Section(BaseModel):
    sectionId: str
    sectionTitle: Optional[str] = None
    sectionDescription: Optional[str] = None
    chapters: List[Chapter] = Field(default_factory=list)


class Enrollment(BaseModel):
    userId: str


class Course(BaseModel):
    courseId: str
    teacherId: Optional[str] = None
    teacherName: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    image: Optional[str] = None
    price: Optional[float] = None
    level: Optional[str] = None
    status: Optional[str] = None
    sections: List[Section] = Field(default_factory=list)
    enrollments: List[Enrollment] = Field(default_factory=list)

    def is_enrolled(self, user_id: str) -> bool:
        return any(enrollment.userId == user_id for enrollment in self.enrollments)
