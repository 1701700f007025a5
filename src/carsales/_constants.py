"""Internal constants shared across the library."""

MAX_MANUFACTURES = 20
MAX_CARS = 20

# search_by_age() treats this max_age as "no upper bound".
NO_MAX_AGE = -1

DEFAULT_DATA_FILE = "cars.dat"
