"""
Application constants
"""

# Task enumerations (values are the wire format)
IMPORTANCE_NORMAL = "Normal"
IMPORTANCE_IMPORTANT = "Important"
STATUS_PENDING = "Pending"
STATUS_COMPLETED = "Completed"

# Storage
DEFAULT_DATA_FILE = "./data/tasks.json"

# API
API_PREFIX = "/api"
TASKS_ENDPOINT = "/api/tasks"
DEFAULT_API_BASE_URL = "http://127.0.0.1:5000"
DEFAULT_API_TIMEOUT = 10  # seconds

# Response messages (kept identical to the original backend)
MSG_INVALID_DATA = "Invalid data"
MSG_TASK_NOT_FOUND = "Task not found"
MSG_SERVER_ERROR = "Server Error"
MSG_TASK_DELETED = "Task deleted successfully"

# Views
MSG_NO_TASKS = "No tasks added yet!"
MSG_FILL_ALL_FIELDS = "Please fill title, description, and due date!"

QUOTES = [
    "Stay focused and never give up!",
    "Small steps every day lead to big results!",
    "Your tasks today define your tomorrow!",
    "Work smart, not just hard!",
    "Dream big, act bigger!",
    "Small steps every day lead to big success.",
    "Discipline today, freedom tomorrow.",
    "Push yourself, no one else will do it for you.",
    "Stay focused. Stay consistent.",
    "Your only limit is your mindset.",
]

# Quotes page, by section
QUOTE_GROUPS = {
    "Short & Powerful": [
        "Small steps every day lead to big success.",
        "Discipline today, freedom tomorrow.",
        "Push yourself, no one else will do it for you.",
        "Stay focused. Stay consistent.",
        "Your only limit is your mindset.",
    ],
    "Success & Growth": [
        "Dream big. Start small. Act now.",
        "Success is built on daily habits.",
        "Don't stop until you're proud.",
        "Hard work beats talent when talent doesn't work hard.",
        "Make today count.",
    ],
}

# Logging
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
