from typing import Hashable, Optional


class Selection:
    """Single-item selection shared by the dispatch board and the lead pipeline.

    Selecting the item that is already selected clears it; selecting another
    item replaces it. There is never more than one selected id.
    """

    def __init__(self, selected: Optional[Hashable] = None):
        self.selected = selected

    def select(self, item_id: Hashable) -> Optional[Hashable]:
        if self.selected == item_id:
            self.selected = None
        else:
            self.selected = item_id
        return self.selected

    def clear(self) -> None:
        self.selected = None

    def is_selected(self, item_id: Hashable) -> bool:
        return self.selected is not None and self.selected == item_id
