import logging
from datetime import date

from madrasa_portal.core.database import SessionLocal, create_database_tables
from madrasa_portal.models.student import Student
from madrasa_portal.schemas.result import ResultCreate
from madrasa_portal.services.result import result as crud_result

# Setup logging to see output
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def seed_data():
    """
    Seed a few students and their results for local development.
    """
    create_database_tables()
    db = SessionLocal()
    try:
        # Skip when data already exists to avoid duplicates
        if db.query(Student).first():
            logger.info("Database already contains data. Skipping seed.")
            return

        logger.info("Seeding data...")

        students = [
            Student(
                full_name="Abdullah Rahman",
                class_name="hifz-beginner",
                phone="01711000001",
                father_name="Abdur Rahman",
                mother_name="Ayesha Begum",
                date_of_birth=date(2014, 3, 12),
            ),
            Student(
                full_name="Fatima Khatun",
                class_name="madani-first",
                phone="01711000002",
                father_name="Karim Uddin",
                mother_name="Rahima Khatun",
                date_of_birth=date(2013, 7, 2),
            ),
            Student(
                full_name="Yusuf Hossain",
                class_name="nazera",
                phone="01711000003",
                father_name="Jamal Hossain",
                mother_name="Salma Akter",
                date_of_birth=date(2015, 1, 25),
            ),
        ]
        db.add_all(students)
        db.commit()

        # Results go through the service so names and classes are copied from the students
        for student, grade, marks in zip(students, ("A+", "B", "F"), (92, 68, 31)):
            crud_result.create_result(
                db,
                ResultCreate(student_id=student.id, exam="Half-yearly", grade=grade, marks=marks),
            )

        logger.info("✅ Data seeded successfully!")

    except Exception as e:
        logger.error(f"❌ Error seeding data: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_data()
