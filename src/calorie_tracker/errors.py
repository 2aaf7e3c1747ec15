"""Exception hierarchy for the calorie tracker."""


class CalorieTrackerError(Exception):
    """Base class for application errors."""


class InputError(CalorieTrackerError):
    """Caller omitted or malformed required input."""


class MissingImageError(InputError):
    """No image payload was supplied for analysis."""


class FormValidationError(InputError):
    """Profile or meal form values failed validation."""


class UpstreamError(CalorieTrackerError):
    """The vision endpoint failed, timed out, or returned nothing."""


class ParseError(CalorieTrackerError):
    """Model output did not contain a decodable estimate."""


class NoStructuredContentError(ParseError):
    """Model output contained no brace-delimited object."""


class MalformedEstimateError(ParseError):
    """Model output contained an object that is not a valid estimate."""


class MealAnalysisError(CalorieTrackerError):
    """A meal photo could not be turned into an estimate."""


class AnalysisInProgressError(CalorieTrackerError):
    """Another photo analysis is still running."""


class StaleAnalysisError(CalorieTrackerError):
    """The day was reset while a photo analysis was running."""


class PersistenceError(CalorieTrackerError):
    """Stored state could not be read or written."""
