from datetime import datetime
from typing import TypedDict


class UserDocument(TypedDict, total=False):

    _id: str
    # identifier supplied by the client (e.g. from its auth provider)
    userId: str
    customUserId: str
    createdAt: datetime
