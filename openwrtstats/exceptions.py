class OpenWrtStatsException(Exception):
    pass


class InvalidConfiguration(OpenWrtStatsException):
    """A router entry or the whole configuration could not be used"""
    pass


class SourceUnreachable(OpenWrtStatsException):
    """A router or lease endpoint failed, timed out or returned an error status"""

    def __init__(self, source_id, reason):
        self.source_id = source_id
        self.reason = reason
        super().__init__(f"{source_id}: {reason}")
