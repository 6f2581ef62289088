from typing import Literal

GRADES = ("A+", "A", "A-", "B+", "B", "B-", "C+", "C", "C-", "D", "F")
FAILING_GRADES = ("D", "F")

CLASS_NAMES = (
    "madani-first",
    "madani-second",
    "hifz-beginner",
    "hifz-intermediate",
    "hifz-advanced",
    "nazera",
    "qaida",
)

Grade = Literal["A+", "A", "A-", "B+", "B", "B-", "C+", "C", "C-", "D", "F"]
ClassName = Literal[
    "madani-first",
    "madani-second",
    "hifz-beginner",
    "hifz-intermediate",
    "hifz-advanced",
    "nazera",
    "qaida",
]

DEFAULT_CREATED_BY = "principal"

# Largest value a signed 64-bit SQL INTEGER (LIMIT/OFFSET) accepts
MAX_SQL_INTEGER = 2 ** 63 - 1
