# ABOUTME: Core Book data structure shared by the catalog and the CLI.
# ABOUTME: Optional fields are None when absent; authors/editors are ordered name lists.

from dataclasses import dataclass, field

from shelfkeeper.model.dates import PurchaseDate
from shelfkeeper.model.names import format_name_list


@dataclass
class Book:
    """A book in the personal library.

    Publisher, series and people are referenced by name; the catalog
    resolves names to rows. A Book read back from the catalog carries
    its row id; a candidate for insertion has id None.
    """

    title: str
    authors: list[str] = field(default_factory=list)
    editors: list[str] = field(default_factory=list)
    subtitle: str | None = None
    year: int | None = None
    edition: int | None = None
    publisher: str | None = None
    isbn: str | None = None
    series: str | None = None
    status: str = "Owned"
    purchased: PurchaseDate | None = None
    id: int | None = None

    @property
    def author(self) -> str:
        """Authors formatted as "A, B and C"."""
        return format_name_list(self.authors)

    @property
    def editor(self) -> str:
        """Editors formatted as "A, B and C"."""
        return format_name_list(self.editors)

    @property
    def full_title(self) -> str:
        return f"{self.title}: {self.subtitle}" if self.subtitle else self.title

    @property
    def credit(self) -> str:
        """Who to credit in a one-line listing: authors, else editors, else a placeholder."""
        if self.authors:
            return self.author
        if self.editors:
            return f"{self.editor} (ed.)"
        return "[No author]"

    def __str__(self) -> str:
        year = self.year if self.year is not None else "n.d."
        return f"{self.credit}, {self.full_title} ({year}) [{self.status}]"
