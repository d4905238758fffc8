from typing import Any, Dict, List, Optional
from decimal import Decimal, InvalidOperation
import logging
from boto3.dynamodb.conditions import Key
from botocore.exceptions import ClientError

from models.course import Course
from models.transaction import Transaction
from models.user_course_progress import UserCourseProgress

logger = logging.getLogger(__name__)


def convert_to_dynamodb_type(value: Any) -> Any:
    """
    Convert various data types to DynamoDB-compatible types.
    """
    if isinstance(value, bool):
        return value  # Handle booleans first to prevent conversion to Decimal
    elif isinstance(value, (int, float)):
        try:
            return Decimal(str(value))
        except InvalidOperation:
            logger.error(f"Failed to convert numeric value: {value}")
            raise
    elif isinstance(value, dict):
        return {k: convert_to_dynamodb_type(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [convert_to_dynamodb_type(item) for item in value]
    return value


def _to_item(model) -> Dict[str, Any]:
    return convert_to_dynamodb_type(model.model_dump(exclude_none=True))


class DynamoDBStore:
    """Courses, transactions and course progress kept in DynamoDB tables"""

    def __init__(self, dynamodb, settings):
        self.courses = dynamodb.Table(settings.courses_table)
        self.transactions = dynamodb.Table(settings.transactions_table)
        self.progress = dynamodb.Table(settings.user_course_progress_table)

    def get_course(self, course_id: str) -> Optional[Course]:
        response = self.courses.get_item(Key={'courseId': course_id})
        if 'Item' not in response:
            return None
        return Course(**response['Item'])

    def _put_new(self, table, item, key_attribute: str) -> bool:
        """Write item unless its key is taken. Returns False when a record already exists."""
        try:
            table.put_item(Item=item, ConditionExpression=f'attribute_not_exists({key_attribute})')
            return True
        except ClientError as e:
            if e.response['Error']['Code'] == 'ConditionalCheckFailedException':
                return False
            raise

    def get_transaction(self, user_id: str, transaction_id: str) -> Optional[Transaction]:
        response = self.transactions.get_item(Key={'userId': user_id, 'transactionId': transaction_id})
        if 'Item' not in response:
            return None
        return Transaction(**response['Item'])

    def put_transaction(self, transaction: Transaction) -> bool:
        return self._put_new(self.transactions, _to_item(transaction), 'transactionId')

    def delete_transaction(self, transaction: Transaction) -> None:
        self.transactions.delete_item(
            Key={'userId': transaction.userId, 'transactionId': transaction.transactionId}
        )

    def list_transactions(self, user_id: Optional[str] = None) -> List[Transaction]:
        if user_id:
            kwargs = {'KeyConditionExpression': Key('userId').eq(user_id)}
            fetch = self.transactions.query
        else:
            kwargs = {}
            fetch = self.transactions.scan

        items = []
        while True:
            response = fetch(**kwargs)
            items.extend(response.get('Items', []))
            if 'LastEvaluatedKey' not in response:
                break
            kwargs['ExclusiveStartKey'] = response['LastEvaluatedKey']
        return [Transaction(**item) for item in items]

    def get_course_progress(self, user_id: str, course_id: str) -> Optional[UserCourseProgress]:
        response = self.progress.get_item(Key={'userId': user_id, 'courseId': course_id})
        if 'Item' not in response:
            return None
        return UserCourseProgress(**response['Item'])

    def put_course_progress(self, progress: UserCourseProgress) -> bool:
        return self._put_new(self.progress, _to_item(progress), 'courseId')

    def delete_course_progress(self, progress: UserCourseProgress) -> None:
        self.progress.delete_item(Key={'userId': progress.userId, 'courseId': progress.courseId})

    def add_enrollment(self, course_id: str, user_id: str) -> bool:
        """
        Append {userId} to the course enrollments unless it is already there.
        Returns False when the user was already enrolled.
        """
        enrollment = {'userId': user_id}
        try:
            self.courses.update_item(
                Key={'courseId': course_id},
                UpdateExpression='SET #enrollments = list_append(if_not_exists(#enrollments, :empty), :new)',
                ConditionExpression='attribute_exists(courseId) AND NOT contains(#enrollments, :enrollment)',
                ExpressionAttributeNames={'#enrollments': 'enrollments'},
                ExpressionAttributeValues={
                    ':empty': [],
                    ':new': [enrollment],
                    ':enrollment': enrollment,
                },
            )
            return True
        except ClientError as e:
            if e.response['Error']['Code'] != 'ConditionalCheckFailedException':
                raise
        # Either already enrolled or the course vanished after lookup
        course = self.get_course(course_id)
        if course is not None and course.is_enrolled(user_id):
            return False
        raise LookupError(f"Course {course_id} disappeared before enrollment")
