import boto3
import logging

logger = logging.getLogger(__name__)


# DynamoDB Configuration
def get_dynamodb_resource(settings):
    """Get DynamoDB resource"""
    return boto3.resource(
        'dynamodb',
        endpoint_url=settings.dynamodb_endpoint_url,
        region_name=settings.aws_region,
        aws_access_key_id=settings.aws_access_key_id,
        aws_secret_access_key=settings.aws_secret_access_key
    )


def _create_table(dynamodb, **table_spec):
    table_name = table_spec['TableName']
    try:
        table = dynamodb.create_table(
            ProvisionedThroughput={
                'ReadCapacityUnits': 5,
                'WriteCapacityUnits': 5
            },
            **table_spec
        )
        logger.info(f"Creating {table_name} table...")
        table.wait_until_exists()
    except dynamodb.meta.client.exceptions.ResourceInUseException:
        logger.info(f"{table_name} table already exists")


def create_tables(settings):
    """Create DynamoDB tables if they don't exist"""
    dynamodb = get_dynamodb_resource(settings)

    # Courses table
    _create_table(
        dynamodb,
        TableName=settings.courses_table,
        KeySchema=[
            {'AttributeName': 'courseId', 'KeyType': 'HASH'}
        ],
        AttributeDefinitions=[
            {'AttributeName': 'courseId', 'AttributeType': 'S'},
            {'AttributeName': 'category', 'AttributeType': 'S'}
        ],
        GlobalSecondaryIndexes=[
            {
                'IndexName': 'CategoryIndex',
                'KeySchema': [
                    {'AttributeName': 'category', 'KeyType': 'HASH'}
                ],
                'Projection': {'ProjectionType': 'ALL'},
                'ProvisionedThroughput': {
                    'ReadCapacityUnits': 5,
                    'WriteCapacityUnits': 5
                }
            }
        ]
    )

    # Transactions table, partitioned by user so listing by userId is a query
    _create_table(
        dynamodb,
        TableName=settings.transactions_table,
        KeySchema=[
            {'AttributeName': 'userId', 'KeyType': 'HASH'},
            {'AttributeName': 'transactionId', 'KeyType': 'RANGE'}
        ],
        AttributeDefinitions=[
            {'AttributeName': 'userId', 'AttributeType': 'S'},
            {'AttributeName': 'transactionId', 'AttributeType': 'S'}
        ]
    )

    # UserCourseProgress table
    _create_table(
        dynamodb,
        TableName=settings.user_course_progress_table,
        KeySchema=[
            {'AttributeName': 'userId', 'KeyType': 'HASH'},
            {'AttributeName': 'courseId', 'KeyType': 'RANGE'}
        ],
        AttributeDefinitions=[
            {'AttributeName': 'userId', 'AttributeType': 'S'},
            {'AttributeName': 'courseId', 'AttributeType': 'S'}
        ]
    )
