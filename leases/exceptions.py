class LeaseError(Exception):
    """Base class for lease engine failures. ``str(exc)`` is user-presentable."""


class TemplateNotFound(LeaseError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Template '{name}' not found")


class WorkingTemplateNotFound(LeaseError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Working template '{name}' not found")


class AgreementNotFound(LeaseError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Completed agreement '{name}' not found")


class ArtifactExists(LeaseError):
    def __init__(self, name: str, location: str = "Lease Template Masters"):
        self.name = name
        self.location = location
        super().__init__(f"'{name}' already exists in {location}; refusing to overwrite")


class WorkingCopyExists(ArtifactExists):
    def __init__(self, name: str):
        super().__init__(name, "Working Lease Templates")


class AgreementExists(ArtifactExists):
    def __init__(self, name: str):
        super().__init__(name, "Completed Lease Agreements")


class InvalidArtifactName(LeaseError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Invalid artifact name: {name!r}")


class FileCreationFailed(LeaseError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Failed to create file: {reason}")


class InvalidTemplate(LeaseError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid template: {reason}")


class AgreementIntegrityError(LeaseError):
    def __init__(self, file_name: str, expected: str, actual: str):
        self.file_name = file_name
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Agreement '{file_name}' failed integrity check (expected {expected[:8]}, found {actual[:8]})"
        )


class PaymentStateError(LeaseError):
    pass
