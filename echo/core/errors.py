class EchoError(Exception):
    """Base class for errors raised by the Echo core."""


class EntityNotFoundError(EchoError):
    """Raised when an update, completion toggle or delete targets an unknown id."""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")
