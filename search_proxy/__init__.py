"""TomTom location-search proxy."""
