#!filepath: stratlab/utils/errors.py
class StratLabError(RuntimeError):
    """Base class for every error raised by stratlab."""


class ValidationError(StratLabError):
    """
    Raised when a backtest precondition does not hold:
      - series has no timestamp column
      - series sampling is coarser than the requested interval
      - timestamp column cannot be read as epoch seconds or datetimes
      - a strategy returned (or voted) something that is not an Action

    Detected before any ledger entry becomes visible to the caller.
    """


class UpstreamError(StratLabError):
    """
    Failure inside a data collaborator (file source, storage).
    The simulation core never raises it; callers propagate it unchanged.
    """


class UserInputError(StratLabError):
    """
    Raised for invalid user-provided config (interval, strategy type, etc).
    Should NOT print traceback.
    """
