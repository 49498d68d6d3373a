# Models package init
"""
DelipuCash Backend: ORM Models
================================

Importing this package registers every table on `Base.metadata`
(Alembic's --autogenerate and the test suite's create_all rely on it).

Ownership:
    AppUser, Response          → written by other subsystems, read-only here
    ResponseLike, ResponseDislike → written only by the reaction resolver
    ResponseReply              → written only by the reply manager
"""

from delipucash.models.app_user import AppUser
from delipucash.models.response import Response
from delipucash.models.reaction import ResponseDislike, ResponseLike
from delipucash.models.reply import ResponseReply

__all__ = [
    "AppUser",
    "Response",
    "ResponseLike",
    "ResponseDislike",
    "ResponseReply",
]
