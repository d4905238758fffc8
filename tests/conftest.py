import os

# main.py builds the app on import and refuses to start without a key
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_dummy")

import copy
from typing import Dict, List, Optional

import pytest

from config.settings import Settings
from main import create_app
from models.course import Course, Enrollment
from models.transaction import Transaction
from models.user_course_progress import UserCourseProgress


COURSE = {
    "courseId": "course-1",
    "teacherId": "teacher-1",
    "teacherName": "Sarah Johnson",
    "title": "Introduction to Python Programming",
    "price": 4999,
    "sections": [
        {
            "sectionId": "section-1",
            "chapters": [{"chapterId": "chapter-1"}, {"chapterId": "chapter-2"}],
        },
        {
            "sectionId": "section-2",
            "chapters": [{"chapterId": "chapter-3"}],
        },
    ],
    "enrollments": [],
}


class FakeStore:
    """In-memory stand-in for DynamoDBStore; `fail_on` names a method that raises"""

    def __init__(self, courses: Optional[List[dict]] = None):
        self.courses: Dict[str, Course] = {
            course["courseId"]: Course(**course) for course in (courses or [])
        }
        self.transactions: List[Transaction] = []
        self.progress: Dict[tuple, UserCourseProgress] = {}
        self.fail_on = set()

    def _check(self, name):
        if name in self.fail_on:
            raise RuntimeError(f"{name} failed")

    def get_course(self, course_id):
        self._check("get_course")
        course = self.courses.get(course_id)
        return copy.deepcopy(course) if course else None

    def get_transaction(self, user_id, transaction_id):
        self._check("get_transaction")
        for transaction in self.transactions:
            if (transaction.userId, transaction.transactionId) == (user_id, transaction_id):
                return transaction
        return None

    def put_transaction(self, transaction):
        self._check("put_transaction")
        if self.get_transaction(transaction.userId, transaction.transactionId):
            return False
        self.transactions.append(transaction)
        return True

    def delete_transaction(self, transaction):
        self._check("delete_transaction")
        self.transactions = [
            t for t in self.transactions
            if (t.userId, t.transactionId) != (transaction.userId, transaction.transactionId)
        ]

    def list_transactions(self, user_id=None):
        self._check("list_transactions")
        return [t for t in self.transactions if not user_id or t.userId == user_id]

    def get_course_progress(self, user_id, course_id):
        self._check("get_course_progress")
        return self.progress.get((user_id, course_id))

    def put_course_progress(self, progress):
        self._check("put_course_progress")
        key = (progress.userId, progress.courseId)
        if key in self.progress:
            return False
        self.progress[key] = progress
        return True

    def delete_course_progress(self, progress):
        self._check("delete_course_progress")
        self.progress.pop((progress.userId, progress.courseId), None)

    def add_enrollment(self, course_id, user_id):
        self._check("add_enrollment")
        course = self.courses[course_id]
        if course.is_enrolled(user_id):
            return False
        course.enrollments.append(Enrollment(userId=user_id))
        return True


class FakePaymentProcessor:
    def __init__(self):
        self.amounts: List[int] = []
        self.intents: Dict[str, dict] = {}
        self.error: Optional[Exception] = None

    def create_payment_intent(self, amount):
        if self.error:
            raise self.error
        self.amounts.append(amount)
        return f"pi_{len(self.amounts)}_secret_test"

    def retrieve_payment_intent(self, payment_intent_id):
        if self.error:
            raise self.error
        return self.intents[payment_intent_id]


@pytest.fixture
def settings():
    return Settings(stripe_secret_key="sk_test_dummy", client_base_url="http://localhost:3000")


@pytest.fixture
def store():
    return FakeStore([COURSE])


@pytest.fixture
def processor():
    return FakePaymentProcessor()


@pytest.fixture
def app(settings, store, processor):
    return create_app(settings=settings, payment_processor=processor, store=store)
