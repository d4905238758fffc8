import os
import sys
import json
from typing import Any, Dict, List

# Dynamically add the parent directory to Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

# Import custom database configuration
from config.db_config import create_tables, get_dynamodb_resource
from config.settings import load_settings
from helpers.dynamodb_helper import convert_to_dynamodb_type


def validate_data(data: List[Dict[str, Any]], schema: Dict[str, Any]) -> bool:
    """
    Basic validation for the data structure against a schema.
    """
    for record in data:
        for field, field_schema in schema.items():
            if field not in record:
                if field_schema.get('required', True):
                    print(f"Missing required field '{field}' in record: {record}")
                    return False
            elif not isinstance(record[field], field_schema['type']):
                print(f"Field '{field}' has incorrect type in record: {record}")
                return False
    return True


def load_json_data(file_path: str) -> List[Dict[str, Any]]:
    """
    Load data from a JSON file located in the 'data' directory.
    """
    current_dir = os.path.dirname(os.path.abspath(__file__))
    full_path = os.path.join(current_dir, "data", file_path)

    try:
        with open(full_path, 'r') as file:
            return json.load(file)
    except FileNotFoundError:
        print(f"File not found: {full_path}")
        raise
    except json.JSONDecodeError:
        print(f"Invalid JSON format in file: {full_path}")
        raise


def seed_table(table, data: List[Dict[str, Any]], schema: Dict[str, Dict[str, Any]]) -> int:
    """
    Seed records into a DynamoDB table. Returns the number of records written.
    """
    # Validate the data before seeding
    if not validate_data(data, schema):
        print(f"Data validation failed for table: {table.name}")
        return 0

    for record in data:
        try:
            table.put_item(Item=convert_to_dynamodb_type(record))
        except Exception as e:
            print(f"Failed to seed record: {record}. Error: {str(e)}")
            raise
    print(f"Successfully seeded {len(data)} records into {table.name}")
    return len(data)


COURSE_SCHEMA = {
    "courseId": {"type": str, "required": True},
    "teacherId": {"type": str, "required": True},
    "teacherName": {"type": str, "required": True},
    "title": {"type": str, "required": True},
    "category": {"type": str, "required": True},
    "price": {"type": (int, float), "required": True},
    "level": {"type": str, "required": True},
    "status": {"type": str, "required": True},
    "enrollments": {"type": list, "required": True},
    "sections": {"type": list, "required": True}
}


def seed_courses(settings):
    """
    Seed course data into the Courses table.
    """
    print("Seeding courses data...")
    table = get_dynamodb_resource(settings).Table(settings.courses_table)
    return seed_table(table, load_json_data("courses.json"), COURSE_SCHEMA)


def seed_all():
    """
    Create tables and seed all data into the database.
    """
    print("Starting database seeding...")
    settings = load_settings()
    try:
        create_tables(settings)
        seed_courses(settings)
        print("Database seeding completed successfully!")
    except Exception as e:
        print(f"Database seeding failed: {e}")
        raise


if __name__ == "__main__":
    seed_all()
