"""
Domain exceptions for asset registration

Raised by the business layer and mapped to HTTP responses by the API routes.
"""


class AssetDomainError(Exception):
    """Base exception for asset registration errors"""
    pass


class AssetNotFoundError(AssetDomainError):
    """Raised when an asset id does not exist in its category"""

    def __init__(self, asset_category, asset_id):
        self.asset_category = asset_category
        self.asset_id = asset_id
        super().__init__(f"{asset_category.title()} not found: {asset_id}")


class AssetValidationError(AssetDomainError):
    """Raised when a payload fails validation; carries per-field errors"""

    def __init__(self, errors):
        self.errors = errors
        super().__init__("Validation failed")


class AssetConflictError(AssetDomainError):
    """Raised when a unique attribute (plate, VIN, serial, GSA code) is already taken"""
    pass


class DuplicateGSACodeError(AssetConflictError):
    """Raised when a GSA code is already assigned to another asset"""

    def __init__(self, gsa_code):
        self.gsa_code = gsa_code
        super().__init__(f"GSA code already exists: {gsa_code}. Choose a different count number.")
