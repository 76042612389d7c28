"""Domain exceptions raised by the service layer."""


class TurfTalentError(Exception):
    """Base exception for the marketplace backend."""

    status_code: int = 400


class ValidationError(TurfTalentError):
    """Raised when required input is missing or malformed."""

    status_code = 422

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)


class DuplicateClaimError(TurfTalentError):
    """Raised when a candidate already holds a claim for the skill."""

    status_code = 409

    def __init__(self, user_id: str, skill_id: int):
        self.user_id = user_id
        self.skill_id = skill_id
        super().__init__("A claim for this skill already exists")


class DuplicateApplicationError(TurfTalentError):
    """Raised when a candidate applies to the same job twice."""

    status_code = 409

    def __init__(self, job_id: int):
        self.job_id = job_id
        super().__init__("You have already applied to this job")


class AuthorizationError(TurfTalentError):
    status_code = 403


class NotFoundError(TurfTalentError):
    status_code = 404

    def __init__(self, entity: str, entity_id: object):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found")


class InvalidTransitionError(TurfTalentError):
    """Raised when a claim in a terminal state is asked to change status."""

    status_code = 409

    def __init__(self, claim_id: int, current: str, requested: str):
        self.claim_id = claim_id
        self.current = current
        self.requested = requested
        super().__init__(f"Claim {claim_id} is already {current}; cannot mark it {requested}")


class EvidenceUploadError(TurfTalentError):
    """Raised when the evidence store fails to persist an upload."""

    status_code = 502

    def __init__(self, file_name: str, detail: str):
        self.file_name = file_name
        super().__init__(f"Failed to upload evidence '{file_name}': {detail}")


class TransactionError(TurfTalentError):
    """Raised when an atomic multi-row write fails and was rolled back."""

    status_code = 503
