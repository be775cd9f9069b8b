from fastapi import HTTPException, status


# Used for transport failures and non-2xx upstream responses
class APIClientError(HTTPException):
    def __init__(self, detail: str, status_code: int = status.HTTP_503_SERVICE_UNAVAILABLE):
        super().__init__(status_code=status_code, detail=f"External API Error: {detail}")


class RateLimitError(APIClientError):
    def __init__(self, service: str):
        super().__init__(
            detail=f"{service} rate limit exceeded. Please wait a moment and search again."
        )


class ParseError(APIClientError):
    def __init__(self, service: str):
        super().__init__(detail=f"{service} returned an unexpected response format.")


class NotFoundError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class CardsNotFoundError(NotFoundError):
    def __init__(self, query: str):
        self.query = query
        super().__init__(detail=f'No cards found for "{query}".')


class CreatureNotFoundError(NotFoundError):
    def __init__(self, creature_id: int):
        super().__init__(detail=f"Pokemon #{creature_id} has not been loaded.")


class CatalogLoadError(HTTPException):
    def __init__(self):
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Failed to load Pokemon. Please check your connection and try again.",
        )


class BatchInProgressError(HTTPException):
    def __init__(self):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail="A batch is already loading.",
        )
