"""Fixed month and weekday abbreviation tables."""

MONTHS = (
    "Jan.",
    "Fév.",
    "Mar.",
    "Avr.",
    "Mai.",
    "Juin",
    "Juil.",
    "Aoû.",
    "Sep.",
    "Oct.",
    "Nov.",
    "Déc.",
)

# Indexed by day of week, Sunday = 0
WEEKDAYS = ("Su", "Mo", "Tu", "We", "Th", "Fr", "Sa")
