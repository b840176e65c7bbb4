"""
Constants for feedback submission and sentiment classification.
"""

# Subjects a student can leave feedback on
SUBJECTS = [
    "Mathematics",
    "Physics",
    "Computer Science",
    "Data Structures",
    "Algorithms",
    "Database Systems",
    "Operating Systems",
    "Software Engineering",
    "Machine Learning",
    "Web Development",
]

# Feedback categories
CATEGORIES = [
    "Teaching Quality",
    "Course Content",
    "Lab Sessions",
    "Assignments",
    "Examinations",
    "Infrastructure",
    "Library Resources",
    "General",
]

# Length hint shown next to the feedback box (not enforced)
FEEDBACK_TEXT_SOFT_LIMIT = 1000

# Fallback keyword sets; order of evaluation is positive first
POSITIVE_KEYWORDS = ("excellent", "great", "good", "helpful", "amazing")
NEGATIVE_KEYWORDS = ("bad", "poor", "terrible", "worst", "disappointed")

# Backend table names
FEEDBACK_TABLE = "feedback"
STUDENTS_TABLE = "students"
