"""
GSA code and asset registry errors
"""


class GSACodeError(ValueError):
    """Base error for invalid GSA code input supplied by an operator"""
    pass


class InvalidManualCountError(GSACodeError):
    """Manual count override is not an integer between 1 and 999"""

    def __init__(self, count):
        self.count = count
        super().__init__(f"Manual count must be an integer between 1 and 999, got {count!r}")


class RegistryQueryError(Exception):
    """The asset registry could not be queried"""

    def __init__(self, asset_category, message):
        self.asset_category = asset_category
        super().__init__(f"Registry query for '{asset_category}' failed: {message}")
