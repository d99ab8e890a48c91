import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from lms_backend.core.security import hash_password
from lms_backend.models import AccessKey, Course, CourseContent, Notice, User

logger = logging.getLogger(__name__)

SEED_USERS = [
    {
        "first_name": "Admin",
        "last_name": "User",
        "email": "admin@nextgenacademy.com",
        "password": "admin123",
        "role": "admin",
        "bio": "System Administrator",
    },
    {
        "first_name": "John",
        "last_name": "Doe",
        "email": "john@example.com",
        "password": "student123",
        "role": "student",
        "bio": "Passionate learner interested in web development and design",
    },
    {
        "first_name": "Jane",
        "last_name": "Smith",
        "email": "jane@example.com",
        "password": "student123",
        "role": "student",
        "bio": "Aspiring data scientist and machine learning enthusiast",
    },
]

# (course fields, access key, content sections)
SEED_CATALOG = [
    (
        {
            "title": "Web Design Basic to advance",
            "description": "Learn web design from the ground up: HTML, CSS, responsive design and modern design principles.",
            "instructor": "John Smith",
            "duration": "12 weeks",
            "level": "Beginner to Advanced",
            "price": "$99",
            "rating": 5.0,
            "students": 15420,
            "category": "Design",
            "skills": ["HTML", "CSS", "Responsive Design", "Design Tools", "Typography"],
            "curriculum": [
                "Introduction to Web Design",
                "HTML Fundamentals",
                "CSS Styling Techniques",
                "Responsive Design with Media Queries",
            ],
        },
        "WEBDESIGN-2024-A1B2",
        [
            {
                "sectionTitle": "Introduction to Web Design",
                "lessons": [
                    {"title": "What is Web Design?", "type": "video", "duration": "15 min", "url": "https://example.com/video1"},
                    {"title": "Course Materials", "type": "document", "content": "Course syllabus and introduction materials"},
                ],
            },
            {
                "sectionTitle": "HTML & CSS Fundamentals",
                "lessons": [
                    {"title": "HTML Basics", "type": "video", "duration": "30 min", "url": "https://example.com/video3"},
                    {"title": "Practice Files", "type": "download", "url": "https://example.com/files1"},
                ],
            },
        ],
    ),
    (
        {
            "title": "Web development Basic to advance",
            "description": "Become a full-stack web developer covering front-end and back-end technologies and deployment.",
            "instructor": "Sarah Johnson",
            "duration": "16 weeks",
            "level": "Beginner to Advanced",
            "price": "$149",
            "rating": 5.0,
            "students": 21340,
            "category": "Development",
            "skills": ["JavaScript", "React", "Node.js", "Git", "REST APIs"],
            "curriculum": ["Programming Fundamentals", "JavaScript Essentials", "Front-end Frameworks (React)"],
        },
        "WEBDEV-2024-C3D4",
        [
            {
                "sectionTitle": "Programming Fundamentals",
                "lessons": [
                    {"title": "Introduction to Programming", "type": "video", "duration": "25 min", "url": "https://example.com/video5"},
                    {"title": "JavaScript Basics", "type": "video", "duration": "40 min", "url": "https://example.com/video6"},
                ],
            },
        ],
    ),
    (
        {
            "title": "Python Programming",
            "description": "Master Python from syntax basics to data structures, modules and real-world scripting.",
            "instructor": "David Lee",
            "duration": "10 weeks",
            "level": "Beginner",
            "price": "$89",
            "rating": 4.8,
            "students": 18750,
            "category": "Development",
            "skills": ["Python", "Data Structures", "Scripting"],
            "curriculum": ["Python Basics", "Control Flow", "Functions and Modules", "Working with Files"],
        },
        "PYTHON-2024-M3N4",
        [
            {
                "sectionTitle": "Python Basics",
                "lessons": [
                    {"title": "Installing Python", "type": "video", "duration": "10 min", "url": "https://example.com/video9"},
                    {"title": "Cheat Sheet", "type": "download", "url": "https://example.com/files2"},
                ],
            },
        ],
    ),
]

SEED_NOTICES = [
    {
        "title": "Welcome to NextGen LMS!",
        "content": "We are excited to have you join our learning platform. Start exploring our courses today!",
        "type": "info",
        "priority": 3,
    },
    {
        "title": "New Courses Available",
        "content": "Check out our newly added courses. Enroll now with special access keys!",
        "type": "success",
        "priority": 2,
    },
    {
        "title": "Access Keys Information",
        "content": "Use your course access keys to unlock premium content. Contact support if you need assistance.",
        "type": "info",
        "priority": 1,
    },
]


def seed_if_needed(db: Session) -> None:
    existing_course = db.execute(select(Course.id).limit(1)).scalar_one_or_none()
    if existing_course:
        return

    admin = None
    for data in SEED_USERS:
        if db.execute(select(User.id).where(User.email == data["email"])).scalar_one_or_none():
            continue
        user = User(
            email=data["email"],
            password_hash=hash_password(data["password"]),
            name=f"{data['first_name']} {data['last_name']}",
            first_name=data["first_name"],
            last_name=data["last_name"],
            role=data["role"],
            bio=data["bio"],
            cart=[],
            enrolled_courses=[],
        )
        db.add(user)
        if data["role"] == "admin":
            admin = user
    db.flush()
    admin_id = admin.id if admin else None

    for fields, key, sections in SEED_CATALOG:
        course = Course(**fields, is_active=True, created_by=admin_id)
        db.add(course)
        db.flush()

        db.add(AccessKey(key=key, course_id=course.id, max_uses=100, current_uses=0, is_active=True, created_by=admin_id))
        db.add(CourseContent(course_id=course.id, title=course.title, sections=sections))

    for data in SEED_NOTICES:
        db.add(Notice(**data, is_active=True, created_by=admin_id, created_by_name="Admin User"))

    db.commit()
    logger.info("Seeded %d users, %d courses, %d notices", len(SEED_USERS), len(SEED_CATALOG), len(SEED_NOTICES))
