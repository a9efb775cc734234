# ABOUTME: Model package: the in-memory shapes of library data.
# ABOUTME: Exports Book, PurchaseDate and the name-list format/parse pair.

from shelfkeeper.model.dates import DateParseError, PurchaseDate
from shelfkeeper.model.names import format_name_list, parse_name_list
from shelfkeeper.model.types import Book

__all__ = [
    "Book",
    "DateParseError",
    "PurchaseDate",
    "format_name_list",
    "parse_name_list",
]
