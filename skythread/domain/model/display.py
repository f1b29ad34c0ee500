"""Display state of a comment list.

DisplayState is a value: every interaction produces a new one. The reveal
cursor is reset to the initial page size whenever the search term or the sort
mode changes and only grows otherwise.
"""

from pydantic import Field

from skythread.domain.model.common import DomainModel
from skythread.domain.value import SortMode


class DisplayState(DomainModel):
    """Search term, sort mode and reveal cursor of a comment list."""

    search_term: str = ""
    sort_mode: SortMode = SortMode.OLDEST
    revealed_count: int = Field(default=20, ge=0)
    initial_page_size: int = Field(default=20, ge=1)
    page_increment: int = Field(default=30, ge=1)

    @classmethod
    def initial(
        cls,
        initial_page_size: int = 20,
        page_increment: int = 30,
        sort_mode: SortMode = SortMode.OLDEST,
    ) -> "DisplayState":
        """State right after a load: no search, first page revealed."""
        return cls(
            sort_mode=sort_mode,
            revealed_count=initial_page_size,
            initial_page_size=initial_page_size,
            page_increment=page_increment,
        )

    def with_search(self, term: str) -> "DisplayState":
        """Apply a settled search term and reset the reveal cursor."""
        return self.model_copy(
            update={
                "search_term": term.strip(),
                "revealed_count": self.initial_page_size,
            }
        )

    def with_sort(self, sort_mode: SortMode) -> "DisplayState":
        """Switch sort mode and reset the reveal cursor."""
        return self.model_copy(
            update={
                "sort_mode": sort_mode,
                "revealed_count": self.initial_page_size,
            }
        )

    def reveal_more(self, total: int) -> "DisplayState":
        """Reveal another page, clamped to ``total`` entries."""
        revealed = min(self.revealed_count + self.page_increment, total)
        return self.model_copy(
            update={"revealed_count": max(revealed, self.revealed_count)}
        )
