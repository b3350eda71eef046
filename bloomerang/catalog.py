"""Static registry of the Bloomerang collections the connector can sync."""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple


@dataclass(frozen=True)
class CollectionDescriptor:
    """A named Bloomerang collection and the API path that serves it."""

    name: str
    api_path: str
    paginated: bool


# Entity types that expose custom field definitions, values and categories
_CUSTOM_FIELD_TYPES = ("Constituent", "Transaction", "Interaction", "Note", "Benevon")


def _custom_field_collections(prefix: str) -> List[CollectionDescriptor]:
    # Custom field endpoints return a bare array and ignore skip/take
    return [
        CollectionDescriptor(f"{prefix}_{entity.lower()}", f"{prefix}/{entity}", False)
        for entity in _CUSTOM_FIELD_TYPES
    ]


def _paged(*names: str) -> List[CollectionDescriptor]:
    return [CollectionDescriptor(name, name, True) for name in names]


COLLECTIONS: Tuple[CollectionDescriptor, ...] = tuple(
    _paged("addresses", "appeals", "campaigns", "constituents")
    + _custom_field_collections("customfields")
    + _custom_field_collections("customvalues")
    + _custom_field_collections("customfieldcategories")
    + _paged(
        "emails",
        "emailinterests",
        "funds",
        "households",
        "interactions",
        "notes",
        "phones",
        "processors",
        "refunds",
        "relationshiproles",
        "softcredits",
        "tasks",
        "transactions",
        "tributes",
        "walletitems",
    )
)


class CollectionCatalog:
    """
    Immutable lookup over an ordered set of collection descriptors.
    Iteration, names() and select() always follow the declared order.
    """

    def __init__(self, collections: Iterable[CollectionDescriptor]):
        self._collections = tuple(collections)
        self._by_name: Dict[str, CollectionDescriptor] = {}
        for collection in self._collections:
            if collection.name in self._by_name:
                raise ValueError(f"Duplicate collection name in catalog: {collection.name}")
            self._by_name[collection.name] = collection

    def __iter__(self):
        return iter(self._collections)

    def __len__(self) -> int:
        return len(self._collections)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def names(self) -> List[str]:
        return [collection.name for collection in self._collections]

    def get(self, name: str) -> CollectionDescriptor:
        """
        Resolve a collection by name.
        Raises:
            KeyError: if the name is not declared in the catalog.
        """
        try:
            return self._by_name[name]
        except KeyError:
            raise KeyError(f"Unknown Bloomerang collection: {name}") from None

    def select(self, names: Optional[Iterable[str]] = None) -> List[CollectionDescriptor]:
        """
        Return the descriptors for the given names in catalog order.
        All collections are returned when names is None or empty.
        Raises:
            ValueError: if any name is not declared in the catalog.
        """
        if not names:
            return list(self._collections)

        wanted = set(names)
        unknown = sorted(wanted - set(self._by_name))
        if unknown:
            raise ValueError(f"Unknown Bloomerang collection(s): {', '.join(unknown)}")
        return [collection for collection in self._collections if collection.name in wanted]


CATALOG = CollectionCatalog(COLLECTIONS)
