"""Reading workout exports and converting them to model objects."""
