# Filter pills - one toggle + dropdown per filter key, at most one open
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from errors import PillNotOpen
from filters import FILTER_KEYS, FILTER_LABELS, check_key


@dataclass
class Pill:
    """A single filter control: committed value plus a draft while open"""
    key: str
    committed: str = ""
    draft: str = ""
    is_open: bool = False

    @property
    def label(self) -> str:
        return FILTER_LABELS[self.key]

    @property
    def is_active(self) -> bool:
        # Depends on the committed value only, never on open state
        return bool(self.committed)

    def open(self) -> None:
        self.is_open = True
        self.draft = self.committed

    def close(self) -> None:
        self.is_open = False
        self.draft = self.committed

    def edit(self, value: str) -> None:
        if not self.is_open:
            raise PillNotOpen(self.key)
        self.draft = value

    def sync(self, committed: str) -> None:
        """Follow a change of the committed value; a stale draft is dropped"""
        if committed == self.committed:
            return
        self.committed = committed
        self.draft = committed

    def to_dict(self) -> Dict:
        return {
            "key": self.key,
            "label": self.label,
            "value": self.committed,
            "draft": self.draft if self.is_open else "",
            "isOpen": self.is_open,
            "isActive": self.is_active,
        }


class PillBar:
    """
    Container owning the single open pill key.

    Pills never open or close each other; opening goes through the bar,
    which closes whatever was open first.
    """

    def __init__(self):
        self.pills: Dict[str, Pill] = {key: Pill(key) for key in FILTER_KEYS}
        self.open_key: Optional[str] = None

    def __getitem__(self, key: str) -> Pill:
        return self.pills[check_key(key)]

    def open(self, key: str) -> Pill:
        pill = self[key]
        if self.open_key is not None and self.open_key != key:
            self.pills[self.open_key].close()
        pill.open()
        self.open_key = key
        return pill

    def close(self) -> None:
        if self.open_key is not None:
            self.pills[self.open_key].close()
        self.open_key = None

    def toggle(self, key: str) -> Pill:
        if self.open_key == check_key(key):
            self.close()
            return self.pills[key]
        return self.open(key)

    def edit(self, key: str, value: str) -> None:
        self[key].edit(value)

    def apply(self, key: str) -> str:
        """Close the pill and return its trimmed draft for committing"""
        pill = self[key]
        if not pill.is_open:
            raise PillNotOpen(key)
        value = (pill.draft or "").strip()
        self.close()
        return value

    def clear(self, key: str) -> None:
        pill = self[key]
        if self.open_key == key:
            self.close()
        pill.draft = ""

    def sync(self, committed: Mapping[str, str]) -> None:
        for key, value in committed.items():
            self[key].sync(value)

    def to_list(self):
        return [self.pills[key].to_dict() for key in FILTER_KEYS]
