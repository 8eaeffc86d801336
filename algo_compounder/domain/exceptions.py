"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class CoefficientMismatchError(DomainException, TypeError):
    """Formula was paired with coefficients it does not declare"""

    pass


class AlgodAPIError(DomainException):
    """Algod node returned an error or is unavailable"""

    pass


class NodeCredentialsError(DomainException):
    """Node address or API token could not be resolved"""

    pass


class InvalidMnemonicError(DomainException):
    """Account mnemonic is malformed or fails its checksum"""

    pass


class ConfirmationError(DomainException):
    """Transaction was rejected by the pool or never confirmed"""

    pass
