from typing import List
from pydantic import BaseModel, Field

from models.course import Course


class ChapterProgress(BaseModel):
    chapterId: str
    completed: bool = False


class SectionProgress(BaseModel):
    sectionId: str
    chapters: List[ChapterProgress] = Field(default_factory=list)


class UserCourseProgress(BaseModel):
    userId: str
    courseId: str
    enrollmentDate: str
    overallProgress: float = 0
    sections: List[SectionProgress] = Field(default_factory=list)
    lastAccessedTimestamp: str

    @classmethod
    def initial(cls, user_id: str, course: Course, now: str) -> "UserCourseProgress":
        """Fresh progress for a new enrollment: every chapter of the course, none completed"""
        return cls(
            userId=user_id,
            courseId=course.courseId,
            enrollmentDate=now,
            overallProgress=0,
            sections=[
                SectionProgress(
                    sectionId=section.sectionId,
                    chapters=[
                        ChapterProgress(chapterId=chapter.chapterId, completed=False)
                        for chapter in section.chapters
                    ],
                )
                for section in course.sections
            ],
            lastAccessedTimestamp=now,
        )
