from bson.errors import BSONError
from pymongo.errors import PyMongoError


# driver failures plus documents the BSON encoder rejects (e.g. lone surrogates)
STORE_ERRORS = (PyMongoError, BSONError, UnicodeEncodeError)


class ChatAppError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(ChatAppError):

    status_code = 404


class ChatNotFoundError(NotFoundError):

    def __init__(self, chat_id: str) -> None:
        super().__init__("Chat not found.")
        self.chat_id = chat_id


class StoreError(ChatAppError):
    """A call to MongoDB failed. ``operation`` names what the client asked for."""

    status_code = 500

    def __init__(self, operation: str, cause: Exception) -> None:
        super().__init__(str(cause))
        self.operation = operation
        self.cause = cause
