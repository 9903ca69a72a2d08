class ConstructionStageError(Exception):
    """Base exception for construction stage operations."""

    pass


class ValidationError(ConstructionStageError):
    """Raised when input fields break one or more rules. Nothing is written."""

    def __init__(self, errors: dict[str, list[str]]):
        self.errors = errors
        fields = ", ".join(sorted(errors))
        super().__init__(f"Validation failed for fields: {fields}")


class NotFoundError(ConstructionStageError):
    """Raised when no construction stage has the requested id."""

    def __init__(self, stage_id):
        self.stage_id = stage_id
        super().__init__("Construction stage not found")


class InvalidStatusError(ConstructionStageError):
    """Raised when a status outside NEW/PLANNED/DELETED reaches an update."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid status value: {value}, please check the state field")
