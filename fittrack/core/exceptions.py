class FitTrackError(Exception):
    """Base class for recoverable errors raised by the computation engine."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(FitTrackError):
    """Malformed or missing fields for an estimate."""

    def __init__(self, message: str = "Invalid Input"):
        super().__init__(message)


class UnknownActivityTypeError(FitTrackError):
    def __init__(self, activity_type: str):
        super().__init__(f"Unknown Activity: {activity_type}")
        self.activity_type = activity_type


class UnknownFoodError(FitTrackError):
    def __init__(self, food_key: str):
        super().__init__(f"Unknown food: {food_key}")
        self.food_key = food_key


class ConfigurationError(FitTrackError):
    """Static reference data (rank tiers, catalogs) is inconsistent."""

    status_code = 500
