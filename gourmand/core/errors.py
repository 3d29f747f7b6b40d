class GourmandError(RuntimeError):
    def __init__(self, error_class: str, message: str) -> None:
        super().__init__(message)
        self.error_class = error_class


class BedrockRequestError(GourmandError):
    def __init__(self, error_class: str, message: str, retry_count: int = 0) -> None:
        super().__init__(error_class, message)
        self.retry_count = retry_count


class ConversationError(GourmandError):
    pass


class ImageGenerationError(GourmandError):
    pass


class ArtifactError(GourmandError):
    pass
