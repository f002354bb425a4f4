CYCLE_DAYS = {
    "3-day": 3,
    "7-day": 7,
    "30-day": 30,
}
OPT_IN_CYCLE = "3-day"  # manual opt-in only schedules the first cycle
UPCOMING_LIMIT = 10
