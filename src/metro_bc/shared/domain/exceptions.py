"""Domain exceptions for the metro bounded context.

HTTP routers translate these into status codes; the core never imports FastAPI.
"""


class MetroError(Exception):
    """Base class for all metro domain errors."""


class StationNotFoundError(MetroError):
    """A station name or identifier did not resolve to a known station."""

    def __init__(self, names):
        if isinstance(names, str):
            names = [names]
        self.names = list(names)
        super().__init__(f"Station not found: {', '.join(self.names)}")


class NoRouteError(MetroError):
    """Both stations exist but no path connects them."""

    def __init__(self, origin: str, destination: str):
        self.origin = origin
        self.destination = destination
        super().__init__(f"No route found between {origin} and {destination}")


class NetworkIntegrityError(MetroError):
    """The station/edge dataset violates a network invariant."""


class InvalidCrowdLevelError(MetroError, ValueError):
    """A crowd level label is not part of the known vocabulary."""

    def __init__(self, label):
        self.label = label
        super().__init__(f"Unknown crowd level: {label!r}")


class ReportNotFoundError(MetroError):
    def __init__(self, report_id: str):
        self.report_id = report_id
        super().__init__(f"Report {report_id} not found")


class ReportOwnershipError(MetroError):
    def __init__(self, report_id: str, user_id: str):
        self.report_id = report_id
        self.user_id = user_id
        super().__init__(f"User {user_id} does not own report {report_id}")
