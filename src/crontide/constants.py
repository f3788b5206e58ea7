"""Constants for crontide field domains and names."""

# Field names, in expression order for a 7-field expression
SECOND = "second"
MINUTE = "minute"
HOUR = "hour"
DAY_OF_MONTH = "day-of-month"
MONTH = "month"
DAY_OF_WEEK = "day-of-week"
YEAR = "year"

# Inclusive numeric domains. Day-of-week accepts 7 as Sunday on input only.
DOMAINS = {
    SECOND: (0, 59),
    MINUTE: (0, 59),
    HOUR: (0, 23),
    DAY_OF_MONTH: (1, 31),
    MONTH: (1, 12),
    DAY_OF_WEEK: (0, 7),
    YEAR: (1970, 2099),
}

YEAR_MIN, YEAR_MAX = DOMAINS[YEAR]

MONTH_ALIASES = {
    "JAN": 1, "FEB": 2, "MAR": 3, "APR": 4, "MAY": 5, "JUN": 6,
    "JUL": 7, "AUG": 8, "SEP": 9, "OCT": 10, "NOV": 11, "DEC": 12,
}

# 0=Sunday .. 6=Saturday
WEEKDAY_ALIASES = {
    "SUN": 0, "MON": 1, "TUE": 2, "WED": 3, "THU": 4, "FRI": 5, "SAT": 6,
}

ALIASES = {
    MONTH: MONTH_ALIASES,
    DAY_OF_WEEK: WEEKDAY_ALIASES,
}

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

WEEKDAY_NAMES = (
    "Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday",
)

ORDINAL_WORDS = ("first", "second", "third", "fourth", "fifth")

# Largest day each month can ever have; February allows 29 for leap years
MAX_DAYS_IN_MONTH = {
    1: 31, 2: 29, 3: 31, 4: 30, 5: 31, 6: 30,
    7: 31, 8: 31, 9: 30, 10: 31, 11: 30, 12: 31,
}

MAX_NTH = 5
