"""
Typed records for WooCommerce products and the upload template.

Raw JSON from the store (or from the local cache) is validated once here,
at the boundary, so the rest of the code can rely on named fields.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from .errors import ConfigError


def _as_int(value: Any, what: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{what} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    raise ValueError(f"{what} must be an integer, got {value!r}")


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


@dataclass
class Category:
    """Category reference as returned on a product."""
    id: int
    name: str = ""
    slug: str = ""

    @classmethod
    def from_dict(cls, data: Dict) -> "Category":
        if not isinstance(data, dict):
            raise ValueError(f"Category must be an object, got {type(data).__name__}")
        return cls(
            id=_as_int(data.get("id"), "category id"),
            name=_as_str(data.get("name")),
            slug=_as_str(data.get("slug")),
        )

    def to_dict(self) -> Dict:
        return {"id": self.id, "name": self.name, "slug": self.slug}


@dataclass
class MetaEntry:
    """One ``meta_data`` entry. The value is whatever JSON the store holds."""
    key: str
    value: Any = None
    id: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict) -> "MetaEntry":
        if not isinstance(data, dict):
            raise ValueError(f"Meta entry must be an object, got {type(data).__name__}")
        meta_id = data.get("id")
        return cls(
            key=_as_str(data.get("key")),
            value=data.get("value"),
            id=_as_int(meta_id, "meta id") if meta_id is not None else None,
        )

    def to_dict(self) -> Dict:
        out = {"key": self.key, "value": self.value}
        if self.id is not None:
            out["id"] = self.id
        return out


@dataclass
class Product:
    """
    The subset of a WooCommerce product this tool reads.

    Only these fields are kept in the catalog cache.
    """
    id: int
    name: str = ""
    short_description: str = ""
    description: str = ""
    categories: List[Category] = field(default_factory=list)
    meta_data: List[MetaEntry] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict) -> "Product":
        """
        Build a Product from a REST/cache payload.

        Raises:
            ValueError: If the payload is not an object or has no usable id
        """
        if not isinstance(data, dict):
            raise ValueError(f"Product must be an object, got {type(data).__name__}")

        categories = data.get("categories") or []
        meta_data = data.get("meta_data") or []
        if not isinstance(categories, list) or not isinstance(meta_data, list):
            raise ValueError(f"Product {data.get('id')!r} has non-list categories or meta_data")

        return cls(
            id=_as_int(data.get("id"), "product id"),
            name=_as_str(data.get("name")),
            short_description=_as_str(data.get("short_description")),
            description=_as_str(data.get("description")),
            categories=[Category.from_dict(c) for c in categories],
            meta_data=[MetaEntry.from_dict(m) for m in meta_data],
        )

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "short_description": self.short_description,
            "categories": [c.to_dict() for c in self.categories],
            "meta_data": [m.to_dict() for m in self.meta_data],
        }

    def get_meta(self, key: str, default: Any = None) -> Any:
        """Return the value of the last meta entry named ``key``."""
        value = default
        for entry in self.meta_data:
            if entry.key == key:
                value = entry.value
        return value


@dataclass(frozen=True)
class CategoryRef:
    """
    Category reference from the upload template.

    Either a numeric category id or a string value; both are sent to the
    store as ``{"id": value}``.
    """
    value: Union[int, str]

    @classmethod
    def parse(cls, raw: Any) -> "CategoryRef":
        if isinstance(raw, bool) or not isinstance(raw, (int, str)):
            raise ConfigError(f"Category must be an integer or string, got {raw!r}")
        return cls(raw)

    @property
    def is_slug(self) -> bool:
        return isinstance(self.value, str)

    def to_payload(self) -> Dict:
        return {"id": self.value}


@dataclass
class ProductTemplate:
    """Default fields applied to every product created from an image."""
    type: str = "simple"
    regular_price: str = "0.00"
    description: str = "Product description"
    short_description: str = "Short Product Description"
    categories: List[CategoryRef] = field(default_factory=lambda: [CategoryRef(1)])

    @classmethod
    def from_config(cls, meta: Dict) -> "ProductTemplate":
        """
        Validate the ``PRODUCT_META`` config block.

        Raises:
            ConfigError: If the block or one of its categories is invalid
        """
        if not isinstance(meta, dict):
            raise ConfigError("PRODUCT_META must be an object")
        categories = meta.get("categories", [1])
        if not isinstance(categories, list):
            raise ConfigError("PRODUCT_META.categories must be a list")
        return cls(
            type=_as_str(meta.get("type", "simple")),
            regular_price=_as_str(meta.get("regular_price", "0.00")),
            description=_as_str(meta.get("description", "")),
            short_description=_as_str(meta.get("short_description", "")),
            categories=[CategoryRef.parse(c) for c in categories],
        )

    def build_product_body(self, name: str, images: List[Dict]) -> Dict:
        """Request body for creating one product named ``name``."""
        return {
            "name": name,
            "type": self.type,
            "regular_price": self.regular_price,
            "description": self.description,
            "short_description": self.short_description,
            "categories": [c.to_payload() for c in self.categories],
            "images": images,
        }


@dataclass(frozen=True)
class SeoPair:
    """Generated SEO meta title and description."""
    title: str
    description: str

    def fits(self, max_title: int = 60, max_description: int = 160) -> bool:
        return len(self.title) <= max_title and len(self.description) <= max_description
