"""Data models for tab records, live window state and result items."""

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Tuple, Union

from .exceptions import CacheCorruptError

# Label used for spaces without a title (private/incognito windows)
INCOGNITO_SPACE_TITLE = "Incognito"


@dataclass(frozen=True)
class TopAppTab:
    """A top-app (favorite) tab, shared by every space of a window."""
    type: ClassVar[str] = "topApp"

    title: str
    url: str
    tab_index: int

    def searchable_fields(self) -> List[str]:
        return [self.url]

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "title": self.title, "url": self.url, "tab_index": self.tab_index}


@dataclass(frozen=True)
class _SpaceTab:
    """A tab living inside a space."""
    type: ClassVar[str] = ""

    title: str
    url: str
    space_index: int
    space_title: str
    tab_index: int

    def searchable_fields(self) -> List[str]:
        return [self.url, self.space_title]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "title": self.title,
            "url": self.url,
            "space_index": self.space_index,
            "space_title": self.space_title,
            "tab_index": self.tab_index,
        }


@dataclass(frozen=True)
class PinnedTab(_SpaceTab):
    """A pinned tab of a space."""
    type: ClassVar[str] = "pinned"


@dataclass(frozen=True)
class UnpinnedTab(_SpaceTab):
    """An unpinned (today) tab of a space."""
    type: ClassVar[str] = "unpinned"


@dataclass(frozen=True)
class SpaceRecord:
    """A space of the browser window."""
    type: ClassVar[str] = "space"

    title: str
    space_index: int

    def searchable_fields(self) -> List[str]:
        return []

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "title": self.title, "space_index": self.space_index}


TabRecord = Union[TopAppTab, PinnedTab, UnpinnedTab, SpaceRecord]

_RECORD_TYPES = {cls.type: cls for cls in (TopAppTab, PinnedTab, UnpinnedTab, SpaceRecord)}


def record_from_dict(data: Mapping[str, Any]) -> TabRecord:
    """
    Rebuild a tab record from its serialized form.

    Args:
        data: Dict produced by ``to_dict()``

    Returns:
        The matching record variant

    Raises:
        CacheCorruptError: If the type tag is unknown or a field is missing or mistyped
    """
    if not isinstance(data, Mapping):
        raise CacheCorruptError(f"Record is not an object: {data!r}")
    record_type = _RECORD_TYPES.get(data.get("type"))
    if record_type is None:
        raise CacheCorruptError(f"Unknown record type: {data.get('type')!r}")

    fields = {k: v for k, v in data.items() if k != "type"}
    try:
        record = record_type(**fields)
    except TypeError as e:
        raise CacheCorruptError(f"Malformed {record_type.type} record: {e}") from e

    for name in ("tab_index", "space_index"):
        value = getattr(record, name, 0)
        if not isinstance(value, int) or isinstance(value, bool):
            raise CacheCorruptError(f"Malformed {record_type.type} record: {name}={value!r}")
    for name in ("title", "url", "space_title"):
        if not isinstance(getattr(record, name, ""), str):
            raise CacheCorruptError(f"Malformed {record_type.type} record: {name} is not a string")
    return record


@dataclass(frozen=True)
class DynamicState:
    """Point-in-time focus state of every browser window."""
    number_of_windows: int
    window_active_spaces: Dict[int, str] = field(default_factory=dict)

    def active_space(self, window_index: int) -> str:
        return self.window_active_spaces.get(window_index, "")


@dataclass(frozen=True)
class Address:
    """
    Positional address of a space or tab, used as the action argument.

    Serialized shapes:
        ["space", window, space]
        ["topTab", window, tab]
        ["full", window, space, tab]
        ["error"]
    """
    SPACE: ClassVar[str] = "space"
    TOP_TAB: ClassVar[str] = "topTab"
    FULL: ClassVar[str] = "full"
    ERROR: ClassVar[str] = "error"

    kind: str
    coordinates: Tuple[int, ...] = ()

    @classmethod
    def space(cls, window_index: int, space_index: int) -> "Address":
        return cls(cls.SPACE, (window_index, space_index))

    @classmethod
    def top_tab(cls, window_index: int, tab_index: int) -> "Address":
        return cls(cls.TOP_TAB, (window_index, tab_index))

    @classmethod
    def full(cls, window_index: int, space_index: int, tab_index: int) -> "Address":
        return cls(cls.FULL, (window_index, space_index, tab_index))

    @classmethod
    def error(cls) -> "Address":
        return cls(cls.ERROR)

    @classmethod
    def from_list(cls, value: List[Any]) -> "Address":
        """
        Parse a serialized address.

        Raises:
            ValueError: If the list does not match one of the known shapes
        """
        arity = {cls.SPACE: 2, cls.TOP_TAB: 2, cls.FULL: 3, cls.ERROR: 0}
        if not isinstance(value, list) or not value or value[0] not in arity:
            raise ValueError(f"Unknown address: {value!r}")
        kind, coordinates = value[0], value[1:]
        if len(coordinates) != arity[kind] or not all(
            isinstance(c, int) and not isinstance(c, bool) for c in coordinates
        ):
            raise ValueError(f"Malformed {kind} address: {value!r}")
        return cls(kind, tuple(coordinates))

    @property
    def window_index(self) -> Optional[int]:
        return self.coordinates[0] if self.coordinates else None

    def to_list(self) -> List[Any]:
        return [self.kind, *self.coordinates]


@dataclass(frozen=True)
class ModifierAction:
    """Alternate action shown while a modifier key is held."""
    arg: Any
    subtitle: str
    valid: bool = True
    icon: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {"arg": self.arg, "subtitle": self.subtitle, "valid": self.valid}
        if self.icon:
            data["icon"] = {"path": self.icon}
        return data


@dataclass(frozen=True)
class ResultItem:
    """A single display entry."""
    title: str
    subtitle: str
    arg: Address
    icon: str
    modifier_actions: Dict[str, ModifierAction] = field(default_factory=dict)
    is_context_match: bool = False

    # Ranking and filtering keys, not serialized
    record_title: str = ""
    window_index: int = 0
    is_space: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "subtitle": self.subtitle,
            "arg": self.arg.to_list(),
            "icon": {"path": self.icon},
            "mods": {key: action.to_dict() for key, action in self.modifier_actions.items()},
        }
