"""Read-only catalog source backed by a Neo4j graph.

Expected schema:
    (:COURSE {code, name, credits})-[:REQUIRES]->(:COURSE)
    (:STUDENT {id, name})-[:ENROLLED_IN|COMPLETED]->(:COURSE)
    (:FACULTY {id, name, max_courses})-[:TEACHES]->(:COURSE)
"""

import os

from dotenv import load_dotenv
from neo4j import Driver, GraphDatabase

from unidisc.catalog import Catalog
from unidisc.logger import logger
from unidisc.models import Course, Faculty, Student


def get_db_credentials():
    """Load and validate Neo4j credentials from environment.

    Raises:
        ValueError: if required env vars are missing
    """
    load_dotenv()
    uri = os.getenv("NEO4J_DB_URI")
    username = os.getenv("NEO4J_USERNAME")
    password = os.getenv("NEO4J_PASSWORD")

    if not uri:
        raise ValueError("Missing NEO4J_DB_URI. Did you set the env?")
    if not username or not password:
        raise ValueError(
            "Missing NEO4J_USERNAME or NEO4J_PASSWORD. Did you set the env?"
        )

    return uri, (username, password)


def create_driver(uri, auth) -> Driver:
    """Create and verify a Neo4j driver connection."""
    driver = GraphDatabase.driver(uri, auth=auth)  # type: ignore
    driver.verify_connectivity()
    return driver


## Read
def find_courses(tx):
    result = tx.run(
        """
        MATCH (course:COURSE)
        OPTIONAL MATCH (course)-[:REQUIRES]->(prereq:COURSE)
        RETURN course.code AS code, course.name AS name,
               course.credits AS credits, collect(prereq.code) AS prerequisites
        ORDER BY code
        """
    )
    return [
        Course(
            id=record["code"],
            name=record["name"] or "",
            credits=record["credits"] or 0,
            prerequisites=set(record["prerequisites"]),
        )
        for record in result
        if record["code"]
    ]


def find_students(tx):
    result = tx.run(
        """
        MATCH (student:STUDENT)
        OPTIONAL MATCH (student)-[:ENROLLED_IN]->(enrolled:COURSE)
        OPTIONAL MATCH (student)-[:COMPLETED]->(completed:COURSE)
        RETURN student.id AS id, student.name AS name,
               collect(DISTINCT enrolled.code) AS enrolled,
               collect(DISTINCT completed.code) AS completed
        ORDER BY id
        """
    )
    students = []
    for record in result:
        if not record["id"]:
            continue
        completed = set(record["completed"])
        enrolled = set(record["enrolled"]) - completed
        if enrolled != set(record["enrolled"]):
            logger.warn(
                f"Student {record['id']} is marked both enrolled and completed; keeping completed"
            )
        students.append(
            Student(
                id=record["id"],
                name=record["name"] or "",
                enrolled=enrolled,
                completed=completed,
            )
        )
    return students


def find_faculty(tx):
    result = tx.run(
        """
        MATCH (faculty:FACULTY)
        OPTIONAL MATCH (faculty)-[:TEACHES]->(course:COURSE)
        RETURN faculty.id AS id, faculty.name AS name,
               faculty.max_courses AS max_courses, collect(course.code) AS assigned
        ORDER BY id
        """
    )
    return [
        Faculty(
            id=record["id"],
            name=record["name"] or "",
            assigned=set(record["assigned"]),
            max_courses=record["max_courses"] if record["max_courses"] is not None else 3,
        )
        for record in result
        if record["id"]
    ]


def read_catalog(tx) -> Catalog:
    """Build a Catalog from a single read transaction."""
    data = {
        "courses": [c.model_dump() for c in find_courses(tx)],
        "students": [s.model_dump() for s in find_students(tx)],
        "faculty": [f.model_dump() for f in find_faculty(tx)],
    }
    return Catalog.from_dict(data)


def load_catalog(driver: Driver) -> Catalog:
    with driver.session() as session:
        return session.execute_read(read_catalog)
