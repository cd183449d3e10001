# storage/models.py
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

VIDEO = "video"
WEBSITE = "website"

# dataclass attribute -> persisted JSON key
_FIELD_KEYS = {
    "url": "url",
    "type": "type",
    "title": "title",
    "thumbnail": "thumbnail",
    "image": "image",
    "description": "description",
    "author": "author",
    "fetched_at": "fetchedAt",
    "added_at": "addedAt",
    "added_at_approximate": "addedAtApproximate",
}
_KNOWN_KEYS = set(_FIELD_KEYS.values())


@dataclass
class Link:
    url: str
    type: str
    title: str
    thumbnail: Optional[str] = None
    image: Optional[str] = None
    description: Optional[str] = None
    author: Optional[str] = None
    fetched_at: Optional[str] = None
    added_at: Optional[str] = None
    added_at_approximate: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def has_added_at(self) -> bool:
        return bool(self.added_at)

    def set_added_at(self, added_at: str, approximate: bool = False) -> None:
        self.added_at = added_at
        self.added_at_approximate = approximate

    def to_dict(self) -> Dict[str, Any]:
        """
        JSON shape of the entry. Website entries always carry image/description
        (null and "" when unknown); optional fields that were never set are omitted.
        """
        data: Dict[str, Any] = {"url": self.url, "title": self.title}
        if self.type == WEBSITE:
            data["image"] = self.image
            data["description"] = self.description or ""
        else:
            if self.image is not None:
                data["image"] = self.image
            if self.description is not None:
                data["description"] = self.description
        if self.thumbnail is not None or self.type == VIDEO:
            data["thumbnail"] = self.thumbnail
        if self.author:
            data["author"] = self.author
        data["type"] = self.type
        if self.fetched_at:
            data["fetchedAt"] = self.fetched_at
        if self.added_at:
            data["addedAt"] = self.added_at
            if self.added_at_approximate:
                data["addedAtApproximate"] = True
        for key, value in self.extra.items():
            data.setdefault(key, value)
        return data

    @classmethod
    def from_dict(cls, url: str, data: Dict[str, Any]) -> "Link":
        """Build a Link from a persisted entry; unknown keys are kept in `extra`."""
        kwargs = {attr: data.get(key) for attr, key in _FIELD_KEYS.items() if key in data}
        kwargs["url"] = url
        kwargs["type"] = kwargs.get("type") or WEBSITE
        kwargs["title"] = kwargs.get("title") or ""
        kwargs["added_at_approximate"] = bool(kwargs.get("added_at_approximate"))
        extra = {k: v for k, v in data.items() if k not in _KNOWN_KEYS}
        return cls(extra=extra, **kwargs)
