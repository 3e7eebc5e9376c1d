from echo.core.errors import EchoError


class ApiKeyNotSetError(EchoError):
    """Raised before any network call when the vendor has no stored API key."""

    def __init__(self, model):
        self.model = model
        super().__init__(f"{model.display_name} API key not set")
